"""Menu-driven action runner for tmux.

Entry point for runtap application that can run as either a REPL interface
or MCP server depending on command line arguments.
"""

import sys
import logging

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
)


def main():
    """Run runtap as REPL or MCP server based on command line arguments.

    Checks for --mcp flag to determine mode:
    - With --mcp: Runs as MCP server for integration
    - Without --mcp: Runs as interactive REPL
    """
    from .app import app

    if "--mcp" in sys.argv:
        app.mcp.run()
    else:
        app.run(title="runtap - Menu Action Runner")


if __name__ == "__main__":
    main()
