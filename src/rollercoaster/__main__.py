"""Command-line interface."""
from rollercoaster.main import main

if __name__ == "__main__":
    main()
