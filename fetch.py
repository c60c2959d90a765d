# NOTE: thin wrapper so build hooks can run `python fetch.py` from a checkout
# any changes to the CLI api belong in aoc_input_build/cli.py

from aoc_input_build.cli import run

if __name__ == "__main__":
    run()
