"""Command line entry point."""
import sys
import json
import argparse
from pathlib import Path
from typing import List, Optional

from rupiya.config.manager import Config, ConfigManager
from rupiya.config.settings import get_settings
from rupiya.llm.models import TransactionRecord, AnalysisSummary
from rupiya.llm.session import GeminiSessionFactory, ModelAvailability
from rupiya.orchestrator import PipelineConfig, PipelineOrchestrator, PipelineResult
from rupiya.utils.logger import get_logger
from rupiya.utils.exceptions import RupiyaError

logger = get_logger()

SAMPLE_SMS_PATH = Path(__file__).parent / "resources" / "sample_sms.txt"


def read_text(file_path: Optional[str], demo: bool) -> str:
    """Read message text from the demo fixture, a file, or stdin."""
    if demo:
        return SAMPLE_SMS_PATH.read_text(encoding="utf-8")
    if file_path and file_path != "-":
        return Path(file_path).read_text(encoding="utf-8")
    return sys.stdin.read()


def build_session_factory(config: Config, settings) -> Optional[GeminiSessionFactory]:
    """Return a Gemini factory when the model is enabled and configured."""
    if not config.use_model or not config.gemini_api_key:
        return None
    return GeminiSessionFactory.from_settings(settings, config.gemini_api_key, config.model_name)


def analyze_command(args) -> int:
    settings = get_settings()
    config = ConfigManager().load_config()
    if args.no_model:
        config.use_model = False

    text = read_text(args.file, args.demo)
    orchestrator = PipelineOrchestrator(
        PipelineConfig.from_settings(settings),
        build_session_factory(config, settings)
    )
    result = orchestrator.run(text)

    if args.json:
        print(json.dumps(_result_to_dict(result), indent=2, ensure_ascii=False))
    else:
        _print_records(result.records)
        _print_summary(result.summary)
    return 0


def probe_command(args) -> int:
    settings = get_settings()
    config = ConfigManager().load_config()
    factory = build_session_factory(config, settings)
    availability = factory.availability() if factory else ModelAvailability.NOT_READY
    print(f"Model: {availability.value.upper()}")
    return 0 if availability == ModelAvailability.READY else 1


def set_key_command(args) -> int:
    manager = ConfigManager()
    config = manager.load_config()
    config.gemini_api_key = args.api_key
    config.use_model = True

    is_valid, message = manager.validate_config(config)
    if not is_valid:
        print(f"✗ {message}")
        return 1

    manager.save_config(config)
    print(f"✓ Saved API key to {manager.config_file}")
    return 0


def _result_to_dict(result: PipelineResult) -> dict:
    return {
        "run_id": result.run_id,
        "extractor": result.extractor,
        "records": [record.to_dict() for record in result.records],
        "summary": result.summary.to_dict(),
    }


def _print_records(records: List[TransactionRecord]) -> None:
    """Print formatted table of records."""
    print(f"\nTotal: {len(records)} transactions")
    print(f"{'Status':<10} {'Type':<7} {'Amount':>12} {'Category':<10} {'Merchant':<30}")
    print("-" * 72)

    for record in records:
        print(
            f"{record.status.value:<10} {record.type.value:<7} {record.amount:>12} "
            f"{record.category:<10} {record.merchant[:30]:<30}"
        )


def _print_summary(summary: AnalysisSummary) -> None:
    print(f"\nSpent:  {summary.total_spent}")
    print(f"Income: {summary.total_income}")
    print(f"Count:  {summary.transaction_count} ({summary.failed_count} failed)")
    for category, amount in sorted(summary.category_breakdown.items()):
        print(f"  {category:<12} {amount}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Rupiya CLI."""
    parser = argparse.ArgumentParser(description="Rupiya SMS transaction analyzer")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["analyze", "probe", "set-key"],
        default="analyze",
        help="Command to execute (default: analyze)"
    )
    parser.add_argument("--file", help="Text file with messages ('-' or omitted reads stdin)")
    parser.add_argument("--demo", action="store_true", help="Analyze the bundled sample messages")
    parser.add_argument("--no-model", action="store_true", help="Use the regex parser only")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--api-key", help="Gemini API key (for set-key)")

    args = parser.parse_args(argv)

    if args.command == "set-key" and not args.api_key:
        parser.error("set-key requires --api-key")

    commands = {
        "analyze": analyze_command,
        "probe": probe_command,
        "set-key": set_key_command,
    }

    try:
        logger.setLevel(get_settings().log_level.upper())
        return commands[args.command](args)
    except (RupiyaError, OSError) as e:
        logger.critical(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
