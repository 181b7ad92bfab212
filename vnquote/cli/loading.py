"""Loading a quotation state and config from CLI arguments."""

import argparse
import json
import logging
import sys
from typing import Any

from vnquote.core.config import QuoteConfig, parse_reference_date
from vnquote.core.errors import InvalidQuoteState
from vnquote.quote.state import QuoteState

logger = logging.getLogger(__name__)


def load_config(args: argparse.Namespace) -> QuoteConfig:
    """Build the quote config from the environment and CLI overrides.

    Raises:
        ValueError: If the reference date is not DD/MM/YYYY.
    """
    config = QuoteConfig.from_env()
    if getattr(args, "reference_date", None):
        config.reference_date = parse_reference_date(args.reference_date)
    config.validate()
    return config


def read_state_data(path: str) -> Any:
    """Read raw JSON from a file path or stdin.

    Raises:
        InvalidQuoteState: If the file cannot be read or is not JSON.
    """
    try:
        if path == "-":
            return json.load(sys.stdin)
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise InvalidQuoteState(f"Cannot read quotation state: {e}") from e
    except json.JSONDecodeError as e:
        raise InvalidQuoteState(f"Quotation state is not valid JSON: {e}") from e


def load_quote(args: argparse.Namespace) -> tuple[QuoteState, QuoteConfig]:
    """Load the quotation state named by ``args.state``.

    Raises:
        InvalidQuoteState: If the state cannot be read or parsed.
        ValueError: If the reference date is malformed.
    """
    config = load_config(args)
    state = QuoteState.from_dict(read_state_data(args.state), config.reference_date)
    logger.debug("Loaded quotation with %d person(s) for %s", len(state.persons), state.main_product.key)
    return state, config
