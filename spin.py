#!/usr/bin/env python3
from spintax.main import main

if __name__ == "__main__":
    main()
