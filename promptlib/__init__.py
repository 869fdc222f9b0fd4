"""Internal prompt library: browse, submit, save and moderate AI-prompt templates."""

__version__ = "0.1.0"
