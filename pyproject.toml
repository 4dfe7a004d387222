[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vanillapad"
version = "0.1.0"
description = "Gamepad protocol pieces for streaming a console to a second screen: input reports, audio and video framing, H.264 headers and an event loop."
requires-python = ">=3.10"
dependencies = []
keywords = ["gamepad", "h264", "streaming", "protocol", "exp-golomb"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vanillapad"]

[tool.pytest.ini_options]
addopts = "-ra"
