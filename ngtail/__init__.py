"""ngtail -- create Angular projects preconfigured with Tailwind CSS."""

__version__ = "0.1.0"
