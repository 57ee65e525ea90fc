"""Study CLI - aggregate ticks, train the direction classifier, backtest."""

import argparse
import logging
import sys

from daily_system.core.errors import DailySystemError
from daily_system.evaluation.reporting import format_report
from daily_system.io.settings import load_settings
from daily_system.pipeline import run_pipeline

logger = logging.getLogger("daily_system")


def build_overrides(args: argparse.Namespace) -> dict:
    """Translate CLI flags into a nested settings override."""
    overrides = {}

    def put(section: str, key: str, value):
        if value is not None:
            overrides.setdefault(section, {})[key] = value

    put('data', 'path', args.data)
    put('data', 'eval_start', args.eval_start)
    put('data', 'train_fraction', args.train_fraction)
    put('model', 'type', args.model)
    put('model', 'epochs', args.epochs)
    put('features', 'lookback', args.lookback)
    put('backtest', 'threshold', args.threshold)
    put('backtest', 'principal', args.principal)
    put('cv', 'n_folds', args.cv_folds)

    return overrides


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description='Daily direction study and backtest')
    parser.add_argument('--data', type=str, help='Tick file (overrides data.path)')
    parser.add_argument('--config', type=str, help='Settings YAML merged over the packaged defaults')
    parser.add_argument('--model', type=str, choices=['lstm', 'ensemble'], help='Classifier type')
    parser.add_argument('--threshold', type=float, help='Decision threshold on prob_up - prob_down')
    parser.add_argument('--principal', type=float, help='Starting capital')
    parser.add_argument('--lookback', type=int, help='Days per input sequence')
    parser.add_argument('--epochs', type=int, help='LSTM training epochs')
    parser.add_argument('--eval-start', type=str, help='First evaluation date (YYYY-MM-DD)')
    parser.add_argument('--train-fraction', type=float, help='Share of days used for training')
    parser.add_argument('--cv-folds', type=int, help='Walk-forward folds on the training window (0 = off)')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        settings = load_settings(args.config, build_overrides(args))

        print(f"\n{'='*80}")
        print(f"DAILY STUDY: {settings['data']['path']} ({settings['model']['type']})")
        print(f"{'='*80}\n")

        result = run_pipeline(settings)

    except (DailySystemError, FileNotFoundError) as e:
        logger.error("Run failed: %s", e)
        return 1

    print(format_report(result))
    return 0


if __name__ == '__main__':
    sys.exit(main())
