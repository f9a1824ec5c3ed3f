from importlib import metadata

try:
    NETRESOURCE_VERSION = metadata.version("netresource")
except metadata.PackageNotFoundError:
    # Local run without installation
    NETRESOURCE_VERSION = "dev"
