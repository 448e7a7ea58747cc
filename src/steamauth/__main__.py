"""steamauth CLI — `python -m steamauth code <secret>`."""

from steamauth.cli import main

if __name__ == "__main__":
    main()
