"""Entry point for the scanwire demo."""

import logging

import structlog

from scanwire.context import ApplicationContext
from scanwire.demo.services import GreetingService


def configure_logging(level: int = logging.INFO) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def main() -> None:
    configure_logging()
    with ApplicationContext(base_package="scanwire.demo") as context:
        context.refresh()
        service = context.get_bean(GreetingService)
        print(service.say_hello())


if __name__ == "__main__":
    main()
