"""
Entry point for running GroupMe Utils as a module.

This allows users to run the CLI using:
    python -m groupme_utils [command] [options]
"""

from groupme_utils.cli.app import main

if __name__ == "__main__":
    main()
