"""Allow `python -m devrunner.cli`."""

from .main import main

main()
