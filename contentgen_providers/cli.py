"""Debugging CLI: ``contentgen-cli``.

Subcommands
-----------
``resolve``
    Print the resolved auth method, backend and (redacted) generator config
    as JSON. Non-interactive and offline.
``run``
    Send one prompt to the resolved backend and print the reply. ``--stream``
    prints each normalized flush as it arrives.

Errors are printed as JSON to stderr. Exit codes: ``0`` success, ``2`` setup
error (auth, credential, provider), ``1`` call failure.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, Dict, Mapping, Optional

from .auth import Settings, create_generator_config, resolve_auth
from .base.errors import ProviderCallError, ResolutionError
from .base.logging import LogContext, configure_logger, get_logger, normalized_log_event
from .base.models import GenerateContentRequest
from .config.defaults import CLI_DEFAULT_PROMPT
from .session import create_session


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser; no side effects."""
    p = argparse.ArgumentParser(prog="contentgen-cli", description="Content generator debugging CLI")
    p.add_argument("--log-level", default=None, help="Override CONTENTGEN_LOG_LEVEL for this run")
    sub = p.add_subparsers(dest="cmd")

    def _common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--provider", default=None, help="gemini, openai, deepseek or ollama")
        sp.add_argument("--auth", dest="auth_type", default=None, help="Explicit auth method")
        sp.add_argument("--model", default=None)
        sp.add_argument("--base-url", default=None)

    p_resolve = sub.add_parser("resolve", help="Show the resolved backend as JSON")
    _common(p_resolve)

    p_run = sub.add_parser("run", help="Send one prompt")
    _common(p_run)
    p_run.add_argument("prompt", nargs="?", default=CLI_DEFAULT_PROMPT)
    p_run.add_argument("--stream", action="store_true")
    p_run.add_argument("--json", action="store_true", help="Print responses in the Google response shape")
    return p


def _settings_from_args(args: argparse.Namespace) -> Settings:
    return Settings(
        provider=args.provider,
        selected_auth_type=args.auth_type,
        model=args.model,
        base_url=args.base_url,
    )


def _error(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload), file=sys.stderr)


def handle_resolve(args: argparse.Namespace, env: Mapping[str, str]) -> int:
    settings = _settings_from_args(args)
    try:
        resolved = resolve_auth(settings.selected_auth_type, settings.provider, env)
        config = create_generator_config(settings, resolved, env)
    except ResolutionError as exc:
        _error({"error": str(exc), "code": exc.code.value})
        return 2
    print(
        json.dumps(
            {
                **resolved.to_dict(),
                "model": config.model,
                "base_url": config.base_url,
                "has_api_key": bool(config.api_key),
                "vertexai": config.vertexai,
            }
        )
    )
    return 0


def handle_run(args: argparse.Namespace, env: Mapping[str, str]) -> int:
    try:
        session = create_session(_settings_from_args(args), env)
    except ResolutionError as exc:
        _error({"error": str(exc), "code": exc.code.value})
        return 2

    generator = session.generator
    logger = get_logger("contentgen.cli")
    ctx = LogContext(provider=generator.provider_name, model=session.config.model)
    request = GenerateContentRequest.from_prompt(args.prompt)
    normalized_log_event(logger, "cli.start", ctx, phase="start", stream=args.stream)
    try:
        if args.stream:
            for response in generator.generate_content_stream(request):
                if args.json:
                    print(json.dumps(response.to_dict()))
                else:
                    print(response.text, end="", flush=True)
            if not args.json:
                print()
        else:
            response = generator.generate_content(request)
            print(json.dumps(response.to_dict()) if args.json else response.text)
    except ProviderCallError as exc:
        _error({"error": exc.message, "code": exc.code.value, "provider": exc.provider, "phase": exc.phase})
        return 1
    return 0


def main(argv: Optional[list] = None, env: Optional[Mapping[str, str]] = None) -> int:
    """CLI entrypoint; returns the process exit code."""
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.log_level:
        configure_logger(level=args.log_level)
    env = dict(os.environ) if env is None else env
    if args.cmd == "resolve":
        return handle_resolve(args, env)
    if args.cmd == "run":
        return handle_run(args, env)
    p.print_help()
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
