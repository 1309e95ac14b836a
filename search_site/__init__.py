"""Search Site web app"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("search-site")
except PackageNotFoundError:
    __version__ = "dev"
