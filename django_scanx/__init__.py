VERSION = (1, 0, 0)
__version__ = ".".join(map(str, VERSION))


def get_scanner(alias="default"):
    """Helper used for obtaining the scan service configured under ``SCANX``."""
    from django_scanx.handler import scanners

    return scanners[alias]
