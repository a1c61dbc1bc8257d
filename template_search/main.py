"""Entry point: cli | oneshot."""

import asyncio
import sys


def main():
    mode = "cli"
    if len(sys.argv) > 1:
        mode = sys.argv[1].lower()

    if mode == "cli":
        from template_search.interfaces.cli import run_cli

        asyncio.run(run_cli())

    elif mode == "oneshot":
        from template_search.interfaces.oneshot import main as run_oneshot_main

        args = sys.argv[2:]
        pages = 0
        page_builder = None
        keyword_parts = []
        i = 0
        while i < len(args):
            if args[i] == "--pages" and i + 1 < len(args):
                try:
                    pages = int(args[i + 1])
                except ValueError:
                    print(f"Error: --pages must be an integer, got {args[i + 1]!r}")
                    sys.exit(2)
                i += 2
            elif args[i] == "--builder" and i + 1 < len(args):
                page_builder = args[i + 1]
                i += 2
            else:
                keyword_parts.append(args[i])
                i += 1
        if keyword_parts:
            keywords = " ".join(keyword_parts).strip()
        else:
            keywords = sys.stdin.read().strip()
        sys.exit(run_oneshot_main(keywords=keywords, pages=pages, page_builder=page_builder))

    else:
        print(f"Unknown mode: {mode}")
        print("Usage: python -m template_search.main [cli|oneshot] [--pages N] [--builder NAME] [keywords]")
        sys.exit(1)


if __name__ == "__main__":
    main()
