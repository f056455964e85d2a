[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxtakit"
version = "0.1.0"
description = "Chat data models, Audio2Face lip-sync playback and raw PCM helpers for Voxta chat clients"
requires-python = ">=3.10"
keywords = ["voxta", "chat", "lipsync", "audio2face", "arkit", "blendshapes", "audio", "pcm"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Communications :: Chat",
    "Topic :: Multimedia :: Sound/Audio",
]
dependencies = [
    "numpy",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["voxtakit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
