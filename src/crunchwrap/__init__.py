"""crunchwrap - interactive project scaffolding from remote templates."""

__version__ = "0.3.0"
