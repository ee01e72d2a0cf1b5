"""Entry point for 'python -m doclite' command."""

from doclite.cli import main

if __name__ == "__main__":
    main()
