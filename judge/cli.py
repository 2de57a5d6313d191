"""
Command-line entry point for the judge service.

    exam-judge-api --port 8001
    exam-judge-api --check-toolchains
"""
import argparse
import sys

import uvicorn
from dotenv import load_dotenv
from loguru import logger

from config import Settings, config
from judge.toolchains import LANGUAGE_TOOLS, ToolchainConfig


def check_toolchains(settings: Settings) -> int:
    """Log where each enabled language's tools resolve; non-zero if any is missing."""
    toolchains = ToolchainConfig.resolve(settings)
    missing = toolchains.missing(settings.enabled_languages_list)
    for language in settings.enabled_languages_list:
        tools = LANGUAGE_TOOLS.get(language, ())
        logger.info(
            "toolchain_status",
            language=language,
            tools={tool: getattr(toolchains, tool) for tool in tools},
            available=language not in missing,
        )
    if missing:
        logger.error("toolchains_missing", languages=missing)
        return 1
    return 0


def main(argv=None):
    load_dotenv()

    parser = argparse.ArgumentParser(description="Run Exam Judge API")
    parser.add_argument("--host", default=config.api_host, help="Bind host")
    parser.add_argument("--port", type=int, default=config.api_port, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument(
        "--check-toolchains",
        action="store_true",
        help="Resolve interpreters and compilers for the enabled languages, then exit",
    )
    args = parser.parse_args(argv)

    if args.check_toolchains:
        sys.exit(check_toolchains(config))

    logger.info(
        "starting_judge_api",
        host=args.host,
        port=args.port,
        languages=config.enabled_languages_list,
        max_concurrent_judges=config.max_concurrent_judges,
    )

    uvicorn.run(
        "judge.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
