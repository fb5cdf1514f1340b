""" Command line entry point for cashflow_forecaster. """

import argparse
import logging
import os
import sys
from decimal import Decimal
from cashflow_forecaster.forecaster import Forecaster
from cashflow_forecaster.model import DocumentError, load_decisions, load_plan
from cashflow_forecaster.money import to_decimal
from cashflow_forecaster.report import MoneyFormatter, render_run
from cashflow_forecaster.settings import Settings
from cashflow_forecaster.utility.calc import evaluate_expression
from cashflow_forecaster.utility.loan import monthly_payment
from cashflow_forecaster.utility.value_reader import ValueReader

def _build_parser():
    parser = argparse.ArgumentParser(
        prog='cashflow-forecaster',
        description='Daily cash flow forecasts and what-if decisions')
    parser.add_argument(
        '--settings', help='Path to a settings JSON file')
    parser.add_argument(
        '-v', '--verbose', action='count', default=0,
        help='Log more detail (repeat for debug output)')
    commands = parser.add_subparsers(dest='command', required=True)

    forecast = commands.add_parser(
        'forecast', help='Forecast a plan and compare decisions')
    forecast.add_argument('plan', help='Path to plan JSON file')
    forecast.add_argument(
        '-d', '--decisions', action='append', default=[],
        help='Path to a decision (or list of decisions) JSON file')
    forecast.add_argument(
        '--json', action='store_true', help='Print results as JSON')
    forecast.add_argument(
        '--daily', action='store_true',
        help='Include daily balances and transactions')

    loan = commands.add_parser('loan', help='Compute a monthly loan payment')
    loan.add_argument(
        'principal', help="Amount borrowed; arithmetic like '25000-5000' ok")
    loan.add_argument(
        'rate', type=to_decimal, help='Annual interest rate, in percent')
    loan.add_argument('term', type=int, help='Term, in months')
    return parser

def _configure_logging(verbose, settings):
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, str(settings.log_level).upper(), None)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level, format='%(levelname)s %(name)s: %(message)s')

def _run_forecast(args, settings):
    try:
        plan = load_plan(args.plan, default_months=settings.forecast_months)
        decisions = []
        for path in args.decisions:
            decisions.extend(load_decisions(path))
    except (DocumentError, OSError, ValueError) as exc:
        print('Failed to load documents: {}'.format(exc), file=sys.stderr)
        return 2

    run = Forecaster(plan, decisions).run()
    if args.json:
        writer = ValueReader(high_precision=Decimal)
        print(writer.dumps(run.to_dict(daily=args.daily)))
    else:
        sys.stdout.write(render_run(run, settings, daily=args.daily))
    return 0

def _run_loan(args, settings):
    principal = evaluate_expression(args.principal)
    if principal is None:
        print(
            'Cannot evaluate principal: {!r}'.format(args.principal),
            file=sys.stderr)
        return 2
    payment = monthly_payment(principal, args.rate, args.term)
    print(MoneyFormatter.from_settings(settings)(payment))
    return 0

def main(argv=None):
    """ Runs the command line tool and returns its exit status. """
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        if args.settings is None:
            settings = Settings()
        else:
            # Relative paths are otherwise resolved against the package data.
            settings = Settings(os.path.abspath(args.settings))
    except (OSError, TypeError, ValueError) as exc:
        print('Failed to load settings: {}'.format(exc), file=sys.stderr)
        return 2
    _configure_logging(args.verbose, settings)

    if args.command == 'forecast':
        return _run_forecast(args, settings)
    return _run_loan(args, settings)

if __name__ == '__main__':
    sys.exit(main())
