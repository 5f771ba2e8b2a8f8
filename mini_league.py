#!/usr/bin/env python3
"""
FPL Pairs Mini-League CLI

Serves the league API, or scores a gameweek straight to the terminal.

Usage:
    python mini_league.py serve --port 3000
    python mini_league.py score --gw 7
    python mini_league.py score --gw 7 --json
    python mini_league.py pairs
    python mini_league.py league
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from fplpairs import FPLAPIError, MiniLeagueScorer, serve
from fplpairs.config import CONFIG_ENV_VAR, clear_config_cache
from fplpairs.constants import DEFAULT_HOST, DEFAULT_PORT, MAX_GAMEWEEK, MIN_GAMEWEEK
from fplpairs.logging_config import setup_logging
from fplpairs.validators import parse_gameweek

logger = logging.getLogger('fplpairs.cli')


def gameweek_arg(value: str) -> int:
    gw = parse_gameweek(value)
    if gw is None:
        raise argparse.ArgumentTypeError(f'gameweek must be {MIN_GAMEWEEK}-{MAX_GAMEWEEK}')
    return gw


def print_standings(snapshot: dict) -> None:
    print('\n' + '=' * 60)
    print(f"GW{snapshot['gw']} STANDINGS")
    print('=' * 60)

    rank = 0
    for result in snapshot['results']:
        if 'error' in result:
            print(f"   -  {result['teamName']}: {result['error']}")
            continue
        rank += 1
        m1, m2 = result['members']
        captain = m1 if result['captainEntryId'] == m1['entryId'] else m2
        auto = ' (auto)' if result['autoSelected'] else ''
        print(
            f"  {rank:>2}. {result['teamName']}: {result['totalPoints']} pts  "
            f"[{m1['displayName']} {m1['points']}, {m2['displayName']} {m2['points']}; "
            f"C: {captain['displayName']}{auto}]"
        )

    if snapshot['pending']:
        print('\nOfficial points may still be updating.')


def main():
    parser = argparse.ArgumentParser(description='FPL pairs mini-league scorer')
    parser.add_argument(
        '--config', '-c',
        default=None,
        help=f'Path to league_config.json (or set {CONFIG_ENV_VAR})',
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    parser.add_argument('--log-dir', default=None, help='Also write logs to this directory')

    subparsers = parser.add_subparsers(dest='command', required=True)

    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API')
    serve_parser.add_argument('--host', default=os.environ.get('HOST', DEFAULT_HOST))
    serve_parser.add_argument(
        '--port', type=int, default=int(os.environ.get('PORT', DEFAULT_PORT))
    )

    score_parser = subparsers.add_parser('score', help='Score a gameweek')
    score_parser.add_argument('--gw', '-g', type=gameweek_arg, required=True, help='Gameweek (1-38)')
    score_parser.add_argument('--json', action='store_true', help='Print raw JSON')

    subparsers.add_parser('pairs', help='Show team -> entry resolution')
    subparsers.add_parser('league', help='Dump the league directory')

    args = parser.parse_args()

    setup_logging(
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=bool(args.log_dir),
    )

    if args.config:
        os.environ[CONFIG_ENV_VAR] = args.config
        clear_config_cache()

    scorer = MiniLeagueScorer.from_config()

    try:
        if args.command == 'serve':
            serve(scorer, args.host, args.port)

        elif args.command == 'score':
            snapshot = scorer.gameweek_snapshot(args.gw)
            if args.json:
                print(json.dumps(snapshot, indent=2))
            else:
                print_standings(snapshot)

        elif args.command == 'pairs':
            for team in scorer.get_pairs():
                if team.error:
                    print(f'❌ {team.name}: {team.error}')
                else:
                    names = ', '.join(f'{m.squad_name} ({m.entry_id})' for m in team.members)
                    print(f'✓ {team.name}: {names}')

        elif args.command == 'league':
            entries = scorer.league_directory()
            for entry in entries:
                print(f'{entry.entry_id:>10}  {entry.entry_name:<30}  {entry.player_name}')
            print(f'\n{len(entries)} entries in league {scorer.config.league_id}')

    except FPLAPIError as e:
        logger.error(f'FPL API unavailable: {e}')
        sys.exit(1)


if __name__ == '__main__':
    main()
