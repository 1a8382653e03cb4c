"""Quality violation extractors: linter drivers and the quality reporter.

Importing this package registers the built-in drivers.
"""

# Import definitions to register all drivers
from diffgate.quality import definitions as _definitions  # noqa: F401
from diffgate.quality.drivers import (
    EslintDriver,
    QualityDriver,
    RegexBasedDriver,
    XmlQualityDriver,
)
from diffgate.quality.registry import DriverRegistry, registry
from diffgate.quality.reporter import QualityReporter

__all__ = [
    "DriverRegistry",
    "EslintDriver",
    "QualityDriver",
    "QualityReporter",
    "RegexBasedDriver",
    "XmlQualityDriver",
    "registry",
]
