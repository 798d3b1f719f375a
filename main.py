#!/usr/bin/env python3
"""S3 Stream Uploader - エントリーポイント"""
import sys

from s3_stream_uploader.cli import main


if __name__ == "__main__":
    sys.exit(main())
