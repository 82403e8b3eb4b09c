#!/usr/bin/env python3
from mazeviz.app.viewer import main

if __name__ == "__main__":
    main()
