from __future__ import annotations
import argparse, json
from orders_backend.config import DEFAULT_DSN, MAX_SUGGESTIONS
from . import initialize


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Order assistant CLI (suggestions + order text)")
    p.add_argument("--db", default=DEFAULT_DSN, help='Store DSN: "memory://" or "json:///path/to/data.json"')
    p.add_argument("--preset", action="append", default=[], help="Add a phrase preset (repeatable)")
    p.add_argument("-k", type=int, default=MAX_SUGGESTIONS, help="Max suggestions")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--generate", action="store_true", help="Print the text of all stored orders")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    eng = initialize(args.db, presets=args.preset, verbose=args.verbose)
    try:
        def run_query(q: str):
            rows = eng.complete(q, top_k=args.k)
            if args.json:
                print(json.dumps([r.to_dict() for r in rows], ensure_ascii=False, indent=2))
                return
            if not rows:
                print("(no suggestions)"); return
            print("#  Kind    Suggestion")
            for i, r in enumerate(rows, 1):
                print(f"{i:<2} {r.kind.value:<7} {r.display_text}")

        if args.generate:
            print(eng.generate_text() or "(no orders)")

        if args.q is not None:
            run_query(args.q)

        if args.repl:
            print("Type a prefix (empty line to exit). A trailing space or , ; : ends the word.")
            while True:
                try:
                    q = input("> ")
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                run_query(q)

        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
