"""Entry point for 'python -m thinkink'."""

from thinkink.cli import main

if __name__ == "__main__":
    main()
