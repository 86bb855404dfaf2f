[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hlabgfx"
version = "0.1.0"
description = "CPU image filters (box blur, Gaussian blur, bloom) and a Whitted-style ray tracer with a textured cube environment"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pillow",
]
keywords = ["raytracing", "bloom", "gaussian-blur", "image-processing", "rendering"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hlabgfx-bloom = "hlabgfx.bloom_cli:main"
hlabgfx-render = "hlabgfx.render_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hlabgfx"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
