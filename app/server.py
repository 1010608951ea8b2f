"""Command-line entry point: run the gateway under uvicorn."""

import argparse

import uvicorn

from app.core.config import parse_listen_addr, settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="seapin ipfs gateway")
    parser.add_argument("--listen", default=settings.LISTEN_ADDR, help="host:port to bind (default: %(default)s)")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL.lower())
    args = parser.parse_args(argv)

    host, port = parse_listen_addr(args.listen)
    uvicorn.run("app.main:app", host=host, port=port, log_level=args.log_level)


if __name__ == "__main__":
    main()
