# scripts/run.py
import sys

from aadusers.app.main_app import main

if __name__ == "__main__":
    sys.exit(main())
