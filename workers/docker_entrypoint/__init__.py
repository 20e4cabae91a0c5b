"""
docker_entrypoint — process-1 dispatcher for the symbolserver image.

Maps the argument vector handed over by the container runtime to a
supervised, privilege-dropped exec chain and replaces itself with it.
"""

__version__ = "0.1.0"
PACKAGE_NAME = "docker_entrypoint"
SCHEMA_VERSION = "0.1"
