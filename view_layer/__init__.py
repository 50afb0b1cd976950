"""View layer: view models, renderers, helpers and template resolvers."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("view-layer")
except PackageNotFoundError:
    __version__ = "dev"
