#!/usr/bin/env python3
"""git-label command line entry point."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Mapping, Optional

from gitlabel import __version__
from gitlabel.client import ClientOptions, LabelClient
from gitlabel.config import (
    REPOSITORIES_FILE,
    TOKEN_ENV,
    LabelFileError,
    api_url,
    load_label_plan,
    load_repositories,
    read_token,
)
from gitlabel.console import danger, info, warn
from gitlabel.sync import SyncOptions, sync_repositories

EPILOG = f"""\
----------------------------------------------------------------
Be careful! Use it only for new repositories or
repositories with a small number of issues.
Existing labels applied to issues can be lost.
----------------------------------------------------------------

${TOKEN_ENV} env variable MUST be provided.
'labels-to-create.json', 'labels-to-update.json' and 'labels-to-remove.json'
SHOULD be in the labels directory (default: CWD).

json:
  [ {{ "name": "closed: completed", "color": "#d93f0b" }}, ... ]
  [ {{ "currentName": "bug", "name": "type: bug", "color": "#ee0701" }}, ... ]

Examples:
  $ git-label owner/repo-one owner/repo-two
  $ git-label --repositories-json
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='git-label',
        description='Create, update and remove labels across GitHub repositories',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('repositories', nargs='*', help='Repositories as owner/name')
    parser.add_argument(
        '--repositories-json',
        action='store_true',
        help=f"Read repositories from {REPOSITORIES_FILE} instead of arguments",
    )
    parser.add_argument(
        '--repositories-file',
        type=Path,
        default=None,
        help=f"Repository list used with --repositories-json (default: ./{REPOSITORIES_FILE})",
    )
    parser.add_argument('--labels-dir', type=Path, default=Path('.'), help='Directory holding the labels-to-*.json files')
    parser.add_argument('--backup-dir', type=Path, default=Path('.'), help='Directory for used-labels backup files')
    parser.add_argument('--api-url', default=None, help='API base URL (default: $GITHUB_API_URL or https://api.github.com)')
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    token = read_token(environ)
    if not token:
        warn(f"${TOKEN_ENV} env variable MUST be provided")
        return 1

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.repositories and not args.repositories_json:
        parser.print_help()
        return 0

    try:
        if args.repositories_json:
            repositories = load_repositories(args.repositories_file or Path(REPOSITORIES_FILE))
        else:
            repositories = list(args.repositories)
        plan = load_label_plan(args.labels_dir)
    except (OSError, LabelFileError) as exc:
        danger(str(exc))
        return 2

    if plan.is_empty():
        warn(f"No label files found in {args.labels_dir.resolve()}; only backups will be written")

    client = LabelClient(ClientOptions(token=token, api_url=args.api_url or api_url(environ)))
    reports = sync_repositories(client, repositories, plan, SyncOptions(backup_dir=args.backup_dir))
    info(f"Processed {len(reports)} repositories")
    return 0


if __name__ == '__main__':  # pragma: no cover - entry point
    sys.exit(main())
