"""CLI entry point for the weather chat pipeline."""

import argparse
import json
import logging
import sys

from weatherchat.config.loader import config_hash, get_config_value, load_config
from weatherchat.errors import TransportError
from weatherchat.models.stream import ContentDelta, StreamResult
from weatherchat.pipeline.chat_pipeline import ChatPipeline

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherchat",
        description="Weather agent chat and extraction pipeline",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # ask
    ask_p = sub.add_parser("ask", help="Ask the weather agent a question")
    ask_p.add_argument("question", help="Question text")
    ask_p.add_argument("--thread", default=None, help="Conversation thread id")

    # weather
    weather_p = sub.add_parser("weather", help="Current weather, from cache when fresh")
    weather_p.add_argument("location", nargs="?", help="Place name")
    weather_p.add_argument("--lat", type=float, default=None)
    weather_p.add_argument("--lon", type=float, default=None)

    # parse
    parse_p = sub.add_parser("parse", help="Extract weather from a saved reply")
    parse_p.add_argument(
        "file", nargs="?", help="Reply text file (default: stdin)"
    )

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Show one config value")
    get_p.add_argument("key", help="Dotted key, e.g. cache.ttl_minutes")

    # serve
    serve_p = sub.add_parser("serve", help="Run the chat API server")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "ask":
        return _cmd_ask(ChatPipeline(config), args)
    elif args.command == "weather":
        return _cmd_weather(ChatPipeline(config), args)
    elif args.command == "parse":
        return _cmd_parse(ChatPipeline(config), args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_ask(pipeline: ChatPipeline, args) -> int:
    result: StreamResult | None = None
    try:
        for event in pipeline.stream(
            [{"role": "user", "content": args.question}], args.thread
        ):
            if isinstance(event, ContentDelta):
                print(event.content, end=" ", flush=True)
            else:
                result = event
    except TransportError as e:
        print(f"\nError: {e}. Please try again.")
        return 1
    print()

    if result is None or not result.content.strip():
        print("No response received from the weather service. Please try again.")
        return 1
    if result.weather_data is None:
        return 0
    if result.weather_data.is_valid:
        print(pipeline.describe(result.weather_data))
    else:
        print("Weather data unavailable")
    return 0


def _cmd_weather(pipeline: ChatPipeline, args) -> int:
    try:
        if args.location:
            record = pipeline.weather_for(args.location)
        elif args.lat is not None and args.lon is not None:
            record = pipeline.weather_at(args.lat, args.lon)
        else:
            print("Provide a location or --lat and --lon")
            return 1
    except (TransportError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if record is None:
        print("Weather data unavailable")
        return 1
    print(pipeline.describe(record))
    return 0


def _cmd_parse(pipeline: ChatPipeline, args) -> int:
    if args.file:
        with open(args.file) as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    record = pipeline.parse(text)
    if record is None:
        print("No weather data found")
        return 1
    print(json.dumps(record.to_dict(), indent=2))
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        print(f"config_hash = {config_hash(config)}")
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        print(f"{args.key} = {value}")
        return 0
    else:
        print("Use: config show | config get key")
        return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from weatherchat.server import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    uvicorn.run(create_app(ChatPipeline(config)), host=host, port=port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
