"""コマンドラインインターフェース

標準入力をパイプで受け取り、S3互換ストレージへマルチパートアップロードする。

    cat dump.rdb | gzip | s3-stream-uploader --bucket backups --path dump.rdb.gz

ACCESS_KEY と SECRET_KEY は環境変数で指定する。ENDPOINT と REGION も
環境変数で指定できるが、フラグの方が優先される。
"""
import argparse
import os
import sys
from typing import List, Mapping, Optional, TextIO

from . import __version__
from .models.config import Config, LoggingConfig, MEGABYTE, UploadConfig
from .models.events import EventKind
from .utils.logger import LoggerManager
from .utils.progress import ProgressPrinter
from .utils.text import english_join
from .core.orchestrator import send


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """コマンドライン引数をパース"""
    parser = argparse.ArgumentParser(
        prog="s3-stream-uploader",
        usage="INPUT | %(prog)s [flags]\n       %(prog)s [flags] < INPUT",
        description=(
            "A multipart uploader for Amazon S3, DigitalOcean Spaces, "
            "and S3-compatible systems."
        ),
        epilog=(
            "ACCESS_KEY and SECRET_KEY must be set in the environment. "
            "ENDPOINT and REGION can also be set in the environment, "
            "but corresponding flags take precedence."
        ),
    )
    parser.add_argument("-e", "--endpoint", default=None,
                        help="the endpoint to upload to (default: AWS)")
    parser.add_argument("-r", "--region", default=None,
                        help='the region to use; AWS only (default "us-east-1")')
    parser.add_argument("-b", "--bucket", default=None,
                        help="the bucket/space to upload to")
    parser.add_argument("-p", "--path", default=None,
                        help="the remote path at which we should put the file")
    parser.add_argument("-t", "--retries", type=int, default=None,
                        help="the maximum number of times to try uploading a part (default 3)")
    parser.add_argument("-m", "--part-size", type=int, default=None,
                        help="the maximum size per part, in megabytes (default 5)")
    parser.add_argument("-s", "--silent", action="store_true",
                        help="silence output, except errors")
    parser.add_argument("-v", "--version", action="store_true",
                        help="output version information")
    parser.add_argument("--config", default=None,
                        help="optional JSON configuration file")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="log level (default: WARNING)")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> Config:
    """ファイル・環境変数・フラグから設定を組み立てる（後のものが優先）"""
    if environ is None:
        environ = os.environ

    if args.config:
        config = Config.from_file(args.config)
    else:
        config = Config(logging=LoggingConfig(level="WARNING"))

    upload = UploadConfig.from_env(
        environ,
        base=config.upload,
        bucket=args.bucket,
        endpoint=args.endpoint,
        region=args.region,
        key=args.path,
        max_retries=args.retries,
        max_part_size=args.part_size * MEGABYTE if args.part_size is not None else None,
    )

    if args.log_level:
        config.logging.level = args.log_level
    return Config(logging=config.logging, upload=upload)


def main(
    argv: Optional[List[str]] = None,
    stdin=None,
    out: Optional[TextIO] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """メイン関数（終了コードを返す）"""
    args = parse_args(argv)
    out = out or sys.stderr

    if args.version:
        print(__version__, file=sys.stdout)
        return 0

    try:
        config = build_config(args, environ)
    except Exception as e:
        print(f"Error: could not parse config: {e}", file=out)
        return 1

    missing = []
    if not config.upload.bucket:
        missing.append("bucket")
    if not config.upload.key:
        missing.append("path")
    if missing:
        print(f"Error: missing {english_join(missing)}", file=out)
        return 1

    if stdin is None:
        stdin = sys.stdin.buffer
    if stdin.isatty():
        print("Error: input must be through a pipe", file=out)
        return 1

    LoggerManager.setup(config.logging)

    printer = ProgressPrinter(out=out, silent=args.silent)
    printer.start()

    terminal = None
    for event in send(config.upload, stdin):
        printer(event)
        terminal = event

    return 0 if terminal is not None and terminal.kind == EventKind.COMPLETE else 1
