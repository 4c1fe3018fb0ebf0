"""devrunner: local development lifecycle manager for a packaged server app.

Builds the project with Maven, runs the packaged jar as a detached
background process tracked by a PID file, and reports its health.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
