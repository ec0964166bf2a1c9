from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from .formats import (
    CSV_COLUMNS,
    copy_to_clipboard,
    dict_to_csv_line,
    fmt_percent,
    render_result,
    results_to_dict,
)
from .parsing import (
    CURRENCIES,
    parse_cost,
    parse_currency,
    parse_locale,
    parse_rounding,
    parse_tier,
)
from .profiles import Profile, ProfileError, get_profile, save_profile
from .state import CalculatorState
from .tip_core import (
    DEFAULT_TIER,
    TIP_PERCENTAGES,
    RoundingMode,
    ServiceTier,
    compute,
    resolve_rounding_mode,
)

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    default_tier: ServiceTier = DEFAULT_TIER
    default_rounding: RoundingMode = RoundingMode.NONE
    currency: str = "USD"
    locale: Optional[str] = None


def _apply_setting(cfg: AppConfig, key: str, value: object, source: Path) -> None:
    text = str(value).strip()
    try:
        if key in {"default_service", "tip_default_service"}:
            cfg.default_tier = parse_tier(text)
        elif key in {"default_rounding", "tip_default_rounding"}:
            cfg.default_rounding = parse_rounding(text)
        elif key in {"currency", "tip_currency"}:
            cfg.currency = parse_currency(text)
        elif key in {"locale", "tip_locale"}:
            cfg.locale = parse_locale(text) if text else None
    except ValueError as exc:
        logger.warning("Ignoring %s in %s: %s", key, source, exc)


def load_config(path: Optional[str] = None) -> AppConfig:
    cfg = AppConfig()

    # JSON candidates
    json_candidates: List[Path] = []
    if path:
        json_candidates.append(Path(path).expanduser())
    json_candidates.append(Path.cwd() / "tipconfig.json")
    json_candidates.append(Path(__file__).with_name("tipconfig.json"))
    for p in json_candidates:
        if not p.is_file():
            continue
        try:
            data = json.loads(p.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Skipping unreadable config %s: %s", p, exc)
            continue
        if not isinstance(data, dict):
            logger.warning("Skipping config %s: expected a JSON object", p)
            continue
        for key, value in data.items():
            _apply_setting(cfg, str(key).lower(), value, p)
        break

    # .env candidates
    env_candidates: List[Path] = [Path.cwd() / ".env", Path(__file__).with_name(".env")]
    for p in env_candidates:
        if not p.is_file():
            continue
        try:
            lines = p.read_text().splitlines()
        except OSError as exc:
            logger.warning("Skipping unreadable %s: %s", p, exc)
            continue
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip().lower()
            if k.startswith("tip_"):
                _apply_setting(cfg, k, v.strip().strip('"').strip("'"), p)
        break

    return cfg


T = TypeVar("T")


def prompt_loop(prompt: str, parser: Callable[[str], T]) -> T:
    while True:
        try:
            return parser(input(prompt))
        except ValueError as e:
            print(f"Error: {e}")


def yes_no(prompt: str, *, default_yes: bool = True) -> bool:
    suffix = "[Y/n]" if default_yes else "[y/N]"
    while True:
        ans = input(f"{prompt} {suffix} ").strip().lower()
        if not ans:
            return default_yes
        if ans in {"y", "yes"}:
            return True
        if ans in {"n", "no"}:
            return False
        print("Please answer 'y' or 'n'.")


def prompt_tier(state: CalculatorState) -> None:
    menu = "  ".join(
        f"[{i}] {tier.label} ({fmt_percent(TIP_PERCENTAGES[tier])}%)"
        for i, tier in enumerate(ServiceTier, 1)
    )
    current = state.tier

    def _parse(text: str) -> ServiceTier:
        return parse_tier(text) if text.strip() else current

    state.select_tier(prompt_loop(f"How was the service? {menu}  [Enter={current.label}]: ", _parse))


def prompt_rounding(state: CalculatorState) -> None:
    def _label(flag: bool) -> str:
        return "on" if flag else "off"

    prompt = (
        f"Round up? [T]ip ({_label(state.round_tip)}), "
        f"[B]ill total ({_label(state.round_total)}), [N]one  [Enter=keep]: "
    )

    def _parse(text: str) -> Optional[RoundingMode]:
        return parse_rounding(text) if text.strip() else None

    choice = prompt_loop(prompt, _parse)
    if choice is RoundingMode.ROUND_TIP:
        state.set_round_tip(True)
    elif choice is RoundingMode.ROUND_TOTAL:
        state.set_round_total(True)
    elif choice is RoundingMode.NONE:
        state.set_round_tip(False)
        state.set_round_total(False)


def run_interactive(
    state: CalculatorState,
    *,
    currency: str,
    locale: Optional[str],
) -> None:
    print("--- Tip Time ---")
    while True:
        cost_text = input("Cost of service: ")
        prompt_tier(state)
        prompt_rounding(state)

        cost = parse_cost(cost_text)
        result = state.calculate(cost)
        print(
            render_result(
                cost=cost,
                tier=state.tier,
                mode=state.rounding,
                result=result,
                currency=currency,
                locale=locale,
            )
        )

        if not yes_no("Calculate another tip?", default_yes=False):
            break


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tip Time: compute the tip and total bill for a cost of service and service quality, optionally rounding the tip or the total up."
    )
    parser.add_argument("--cost", help="Cost of service, e.g. 51 or $51.00. Unparsable input gives a zero tip")
    parser.add_argument(
        "--service",
        choices=[tier.value for tier in ServiceTier],
        default=None,
        help="Service quality: poor 10%%, average 15%%, good 18%%, excellent 20%%. Default comes from config (average)",
    )
    rounding = parser.add_mutually_exclusive_group()
    rounding.add_argument("--round-tip", action="store_true", help="Round the tip up to the next whole unit")
    rounding.add_argument("--round-total", action="store_true", help="Round the total bill up to the next whole unit")
    rounding.add_argument("--no-round", action="store_true", help="Disable rounding even if the config or profile enables it")
    parser.add_argument("--currency", choices=CURRENCIES, default=None, help="Currency for display and symbol")
    parser.add_argument("--locale", help="Locale for currency formatting (e.g., en_US, de_DE)")
    parser.add_argument("--config", help="Path to JSON config with default_service, default_rounding, currency, locale")
    parser.add_argument("--profile", help="Load saved defaults by name")
    parser.add_argument("--save-profile", help="Save current defaults under a name")
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    parser.add_argument("--csv", action="store_true", help="Output results as CSV")
    parser.add_argument("--copy", action="store_true", help="Copy the output to clipboard")
    parser.add_argument("--interactive", action="store_true", help="Force interactive mode regardless of provided flags.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log calculation details to stderr")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_cli(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    config = load_config(args.config)

    try:
        profile = get_profile(args.profile) if args.profile else Profile()
    except ProfileError as exc:
        parser.error(str(exc))
    if profile is None:
        parser.error(f"Profile '{args.profile}' not found")

    tier = parse_tier(args.service) if args.service else (profile.tier or config.default_tier)
    if args.round_tip or args.round_total:
        mode = resolve_rounding_mode(args.round_tip, args.round_total)
    elif args.no_round:
        mode = RoundingMode.NONE
    else:
        mode = profile.rounding or config.default_rounding
    currency = args.currency or profile.currency or config.currency
    locale = args.locale or profile.locale or config.locale
    if locale:
        try:
            locale = parse_locale(locale)
        except ValueError as exc:
            parser.error(str(exc))

    if args.save_profile:
        try:
            save_profile(
                args.save_profile,
                Profile(tier=tier, rounding=mode, currency=currency, locale=locale),
            )
        except ProfileError as exc:
            parser.error(str(exc))

    state = CalculatorState(tier=tier, rounding=mode)

    if args.interactive or args.cost is None:
        try:
            run_interactive(state, currency=currency, locale=locale)
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
        return 0

    cost = parse_cost(args.cost)
    if cost is None:
        logger.info("Cost %r is not a usable amount; showing a zero tip", args.cost)
    result = compute(cost, state.tier, state.rounding)

    d = results_to_dict(cost=cost, tier=state.tier, mode=state.rounding, result=result, currency=currency)
    if args.json:
        out = json.dumps(d)
    elif args.csv:
        out = ",".join(CSV_COLUMNS) + "\n" + dict_to_csv_line(d)
    else:
        out = render_result(
            cost=cost,
            tier=state.tier,
            mode=state.rounding,
            result=result,
            currency=currency,
            locale=locale,
        )
    print(out)
    if args.copy:
        if not copy_to_clipboard(out):
            print("(Could not copy to clipboard on this system)", file=sys.stderr)
    return 0


def main() -> None:
    sys.exit(run_cli())
