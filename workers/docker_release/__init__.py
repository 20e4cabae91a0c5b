"""
docker_release — build, version-tag and publish the symbolserver image.

The version comes from the Dockerfile; the same image is then pushed
under that version and a fixed list of floating aliases.
"""

__version__ = "0.1.0"
PACKAGE_NAME = "docker_release"
SCHEMA_VERSION = "0.1"
