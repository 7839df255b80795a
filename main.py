"""
Main entry point for the Pipe Encoder.

Records a synthetic test pattern through FFmpeg. See `pipe_encoder.cli` for the
available options.
"""

import sys

from pipe_encoder.cli import main

if __name__ == "__main__":
    sys.exit(main())
