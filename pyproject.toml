[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "objview"
version = "0.1.0"
description = "Wavefront OBJ wireframe viewer with affine transforms, off-screen rendering and animated GIF export"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["obj", "wavefront", "wireframe", "3d", "viewer", "gif", "affine"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Viewers",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[project.scripts]
objview = "objview.viewer:main"

[tool.hatch.build.targets.wheel]
packages = ["objview"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
