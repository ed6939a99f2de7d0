# extpack/__main__.py
from extpack.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
