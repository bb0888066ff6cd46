"""forge - build orchestration for Gecko-based browsers."""

__version__ = "0.4.0"
