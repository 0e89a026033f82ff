#!/usr/bin/env python3
from articlegen.cli import main

if __name__ == "__main__":
    main()
