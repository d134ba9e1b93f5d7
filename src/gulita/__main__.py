"""Entry point for 'python -m gulita' command."""

from gulita.cli import main

if __name__ == "__main__":
    main()
