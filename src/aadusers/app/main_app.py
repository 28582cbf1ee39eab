# src/aadusers/app/main_app.py
from __future__ import annotations
import argparse, json, sys

from aadusers.app.state import AppState
from aadusers.config.loader import load_appsettings, get_auth_config, get_graph_config
from aadusers.core.auth import AuthError, connect
from aadusers.core.data_source import read_users
from aadusers.core.directory_client import DirectoryClient
from aadusers.core.errors import ResolveError, SchemaError
from aadusers.core.graph_client import GraphClient
from aadusers.core.result_sink import JsonFileSink, MemorySink
from aadusers.http.errors import HttpError


class _Dbg:
    def debug(self, msg):
        print("[HTTP]", msg, file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="aadusers", description="Resolve Azure AD users via Microsoft Graph.")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--upn", dest="user_principal_names", action="append", metavar="UPN")
    g.add_argument("--object-id", dest="object_ids", action="append", metavar="UUID")
    g.add_argument("--mail-nickname", dest="mail_nicknames", action="append", metavar="ALIAS")
    p.add_argument("--ignore-missing", action="store_true", help="tolerate users that do not exist")
    p.add_argument("--skip-missing", action="store_true",
                   help="with --ignore-missing, keep looking up after a missing user")
    p.add_argument("--out", metavar="PATH", help="also write the result to this JSON file")
    p.add_argument("--settings", metavar="PATH", help="appsettings.json location")
    p.add_argument("--verbose", action="store_true", help="log HTTP requests to stderr")
    return p


def main(argv=None, *, client: DirectoryClient | None = None) -> int:
    args = build_parser().parse_args(argv)
    raw = {
        "object_ids": args.object_ids,
        "user_principal_names": args.user_principal_names,
        "mail_nicknames": args.mail_nicknames,
        "ignore_missing": args.ignore_missing,
    }
    sink = JsonFileSink(args.out) if args.out else MemorySink()

    try:
        if client is None:
            settings = load_appsettings(args.settings)
            state = AppState(get_auth_config(settings))
            state.token = connect(state.credentials, graph_base=get_graph_config(settings)["base_url"]).token
            graph = GraphClient(lambda: state.token, logger=_Dbg() if args.verbose else None, settings=settings)
            client = DirectoryClient(graph)
        out = read_users(raw, client, sink, skip_missing=args.skip_missing)
    except AuthError as e:
        print(f"auth error [{e.code}]: {e} ({e.hint})", file=sys.stderr)
        return 1
    except (SchemaError, ResolveError, HttpError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
