"""Monte Carlo path tracer with importance sampling.

lumitrace renders scenes of spheres, axis-aligned rectangles, boxes and
participating media, accelerated by a bounding volume hierarchy:
- Recursive path tracing with light/material mixture sampling
- Lambertian, metal, dielectric, emissive and isotropic materials
- Solid, checker, Perlin-noise and image textures
- Thin-lens camera with depth of field and motion blur
- Deterministic row-parallel rendering and progressive accumulation

Subpackages:
    core: Vectors, rays, bounding boxes, sampling, integrator and render loop
    geometry: Shape primitives, instancing wrappers and the BVH
    materials: Materials, textures and Perlin noise
    camera: Thin-lens camera
    scene: Scene container and ready-made scenes
    preview: Tone mapping, preview and export
"""

__version__ = "0.1.0"
