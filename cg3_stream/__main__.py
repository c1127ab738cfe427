"""Package entry point for ``python -m cg3_stream``."""

from cg3_stream.cli import main

if __name__ == "__main__":
    main()
