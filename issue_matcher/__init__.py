"""Issue Matcher - classifies troubleshooting text against a device issue catalog."""

try:
    from issue_matcher._version import version as __version__
except ImportError:
    __version__ = "0.0.0.dev0"
