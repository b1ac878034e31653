"""Main entry point for the Project Portfolio Health Engine."""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

from portfolio_health.engine.pipeline import HealthEngine
from portfolio_health.evaluation.analyzer import HealthAnalyzer
from portfolio_health.evaluation.generator import PortfolioGenerator
from portfolio_health.evaluation.reconciliation import Reconciler
from portfolio_health.storage.memory import InMemoryProjectRepository
from portfolio_health.utils.config import load_config, get_default_config
from portfolio_health.utils.datetime_utils import parse_date
from portfolio_health.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def resolve_today(value: str = None) -> date:
    """Parse --today, defaulting to the current date."""
    if not value:
        return date.today()
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"Invalid --today value: {value}")
    return parsed


def run_analysis(repository: InMemoryProjectRepository, config: dict, today: date, project_id: str = None):
    """Print the health analysis for one or all projects."""
    engine = HealthEngine(config)
    analyzer = HealthAnalyzer(engine)

    if project_id:
        projects = [repository.get_project(project_id)]
    else:
        projects = repository.list_projects()

    for project in projects:
        analysis = analyzer.analyze(project, repository.get_milestones(project.id), today)
        print(analysis.result.to_human_readable())
        for recommendation in analysis.recommendations:
            print(f"  - {recommendation}")
        print()

    issues = analyzer.find_issues(projects, today)
    print(f"Found {len(issues)} potential health calculation issue(s)")
    for issue in issues:
        print(f"  [{issue['severity'].upper()}] {issue['project_title']}: {issue['issue']}")


def run_recalculation(
    repository: InMemoryProjectRepository,
    config: dict,
    today: date,
    apply: bool = False,
    output_path: str = None,
):
    """Recalculate every project and report stored-colour mismatches."""
    reconciler = Reconciler(HealthEngine(config), repository)
    report = reconciler.recalculate_all(today, apply=apply)

    print(f"\nRecalculated {report.total_count} projects as of {today.isoformat()}")
    print(f"Mismatching stored colours: {report.mismatch_count}")
    for mismatch in report.to_dict()['mismatches']:
        print(f"  {mismatch['title'] or mismatch['project_id']}: {mismatch['stored']} -> {mismatch['computed']}")

    if apply:
        print(f"Updated {report.updated_count}/{report.total_count} projects")

    if output_path:
        repository.dump(output_path)
        print(f"Portfolio saved to: {output_path}")

    return report


def run_validation(repository: InMemoryProjectRepository, config: dict):
    """Print duration consistency and statistics."""
    reconciler = Reconciler(HealthEngine(config), repository)

    print(json.dumps({
        'stats': reconciler.duration_stats(),
        'needing_update': reconciler.projects_needing_duration_update(),
        'validation': reconciler.validate_durations(),
    }, indent=2, default=str))


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Project Portfolio Health Engine"
    )
    parser.add_argument(
        'command',
        choices=['analyze', 'recalculate', 'validate', 'generate-portfolio'],
        help='Command to run'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--portfolio',
        type=str,
        default='portfolio.yaml',
        help='Portfolio YAML/JSON file (default: portfolio.yaml)'
    )
    parser.add_argument(
        '--today',
        type=str,
        default=None,
        help='Evaluate as of this date, YYYY-MM-DD (default: current date)'
    )
    parser.add_argument(
        '--project',
        type=str,
        default=None,
        help='Only analyze this project id'
    )
    parser.add_argument(
        '--apply',
        action='store_true',
        help='Write recalculated fields back to the portfolio'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Where to save the portfolio after recalculation or generation'
    )

    args = parser.parse_args()

    config = load_config(args.config) if Path(args.config).exists() else get_default_config()
    setup_logging(config)

    try:
        today = resolve_today(args.today)

        if args.command == 'generate-portfolio':
            generator = PortfolioGenerator(seed=42, config=config)
            projects = generator.generate_portfolio(today)
            output_path = args.output or args.portfolio
            InMemoryProjectRepository(projects).dump(output_path)
            print(f"Generated {len(projects)} projects")
            print(f"Portfolio saved to: {output_path}")
            return 0

        repository = InMemoryProjectRepository.from_file(args.portfolio)

        if args.command == 'analyze':
            run_analysis(repository, config, today, args.project)
        elif args.command == 'recalculate':
            output_path = args.output or (args.portfolio if args.apply else None)
            run_recalculation(repository, config, today, args.apply, output_path)
        elif args.command == 'validate':
            run_validation(repository, config)
    except (FileNotFoundError, ValueError, KeyError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
