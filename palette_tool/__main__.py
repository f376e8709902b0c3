"""palette-tool — Generate 5-colour design palettes with an LLM, keeping locked slots.

Usage: palette-tool generate --style <text> [--industry <text>] [options]

Locks pin a slot to an exact colour across generations:
  --lock 0:#1A1A2E:Ink  keeps slot 1 as #1A1A2E named "Ink"
Pass the same locks again on every run to keep them.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, palette-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import json
import sys
from typing import Any

from palette_tool import llm
from palette_tool.core.env import DEFAULT_PROVIDER, load_env, resolve_provider
from palette_tool.core.errors import InvalidInput, PaletteError
from palette_tool.core.locks import build_lock, build_locks, parse_lock_arg
from palette_tool.core.report import FORMATTERS, format_text
from palette_tool.core.request import build_request
from palette_tool.pipeline import generate_from_payload

EXIT_UPSTREAM = 1
EXIT_USAGE = 2


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument('-s', '--style', help='Style prompt, e.g. "Luxury" or "Playful editorial"')
    p.add_argument('-i', '--industry', help='Industry context, e.g. "Real Estate"')
    p.add_argument('-m', '--mode', help='Palette mode: light or dark (default: light)')
    p.add_argument(
        '-l',
        '--lock',
        action='append',
        default=[],
        metavar='INDEX:HEX[:NAME]',
        help='Pin slot INDEX (0-4) to HEX. Repeatable.',
    )
    p.add_argument('-r', '--request', metavar='FILE', help='JSON request body {style, industry, mode, lockedColors}')


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        '  palette-tool generate --style "Modern minimal" --industry "E-Commerce"\n'
        '  palette-tool generate -s Luxury -m dark -l 0:#111111:Ink -l 4:#C9A227 --format css\n'
        '  palette-tool generate --request body.json --format json\n'
        '  palette-tool prompt -s "Calm clinical" -i Healthcare\n'
        '\n'
        'Provider env vars (set in .env or environment):\n'
        '  OPENAI_API_KEY  + OPENAI_API_URL=https://api.openai.com/v1\n'
        '  GROQ_API_KEY    + GROQ_API_URL=https://api.groq.com/openai/v1\n'
        '  MISTRAL_API_KEY + MISTRAL_API_URL=https://api.mistral.ai/v1\n'
        '  Any OpenAI-compatible: NAME_API_KEY + NAME_API_URL (+ NAME_MODEL)\n'
    )
    parser = argparse.ArgumentParser(
        prog='palette-tool',
        description='Generate 5-colour design palettes with an LLM, keeping locked slots.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    gen = sub.add_parser('generate', help='Generate a palette')
    _add_input_args(gen)
    gen.add_argument('-k', '--api-key', help='LLM API key (overrides env var)')
    gen.add_argument(
        '-p',
        '--provider',
        default=DEFAULT_PROVIDER,
        help=f'LLM provider name (default: {DEFAULT_PROVIDER}). Any OpenAI-compatible name works.',
    )
    gen.add_argument(
        '-f',
        '--format',
        choices=['text', *sorted(FORMATTERS)],
        default='text',
        help='Output format (default: text)',
    )

    prompt = sub.add_parser('prompt', help='Print the prompt that would be sent, without calling the model')
    _add_input_args(prompt)

    return parser


def _load_payload(args: argparse.Namespace) -> dict[str, Any]:
    """Merge the --request body with command-line flags. Flags win."""
    payload: dict[str, Any] = {}
    if args.request:
        with open(args.request, encoding='utf-8') as f:
            body = json.load(f)
        if isinstance(body, dict):
            payload.update(body)

    for key in ('style', 'industry', 'mode'):
        value = getattr(args, key)
        if value is not None:
            payload[key] = value

    if args.lock:
        raw_locks = []
        for text in args.lock:
            raw = parse_lock_arg(text)
            if build_lock(raw) is None:
                print(f'palette-tool: ignoring invalid lock {text!r}', file=sys.stderr)
                continue
            raw_locks.append(raw)
        existing = payload.get('lockedColors')
        payload['lockedColors'] = (list(existing) if isinstance(existing, list) else []) + raw_locks

    return payload


def _print_prompt(payload: dict[str, Any]) -> None:
    locks = build_locks(payload.get('lockedColors'))
    request = build_request(payload.get('style'), payload.get('industry'), payload.get('mode'), locks)
    print(f'# system\n{request.system_prompt}\n')
    print(f'# user\n{request.prompt}')


def _generate(payload: dict[str, Any], args: argparse.Namespace) -> int:
    config = resolve_provider(args.provider, args.api_key)
    missing = config.missing()
    if missing:
        print(f'palette-tool: no provider settings. Set {missing} (or PALETTE_API_KEY).', file=sys.stderr)
        return EXIT_USAGE

    print(f'palette-tool: provider={config.name}  model={config.model}  url={config.api_url}', file=sys.stderr)

    palette = generate_from_payload(payload, complete=llm.completer(config))

    if args.format == 'text':
        print(format_text(palette, build_locks(payload.get('lockedColors'))))
    else:
        print(FORMATTERS[args.format](palette))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'palette-tool: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    try:
        payload = _load_payload(args)
    except (OSError, ValueError) as e:
        print(f'palette-tool: cannot read request file: {e}', file=sys.stderr)
        return EXIT_USAGE

    try:
        if args.command == 'prompt':
            _print_prompt(payload)
            return 0
        return _generate(payload, args)
    except PaletteError as e:
        print(f'palette-tool: {e.message}', file=sys.stderr)
        if e.__cause__ is not None:
            print(f'palette-tool: caused by {e.__cause__}', file=sys.stderr)
        if getattr(args, 'format', None) == 'json':
            print(json.dumps(e.to_dict(), indent=2))
        return EXIT_USAGE if isinstance(e, InvalidInput) else EXIT_UPSTREAM


if __name__ == '__main__':
    sys.exit(main())
