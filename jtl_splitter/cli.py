import os
import sys
import logging
import argparse

from jtl_splitter.configuration import (
    DEFAULT_TIME_UNIT,
    DEFAULT_PRECISION,
    DEFAULT_REPORT_FILE,
    DEFAULT_PLOTS_DIR,
    TIME_UNITS,
)
from jtl_splitter.errors import JTLSplitterError

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Set up logging (only if not already configured)."""
    level = logging.DEBUG if verbose else logging.INFO
    if not logging.root.handlers:
        logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')
    else:
        logging.root.setLevel(level)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not an integer: {value}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Warmup time should be a positive number: {value}")
    return number


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not an integer: {value}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"Precision should not be negative: {value}")
    return number


def jtl_file(value: str) -> str:
    if not os.path.exists(value):
        raise argparse.ArgumentTypeError(f"JTL file does not exist: {value}")
    if not os.path.isfile(value):
        raise argparse.ArgumentTypeError(f"JTL file is not a regular file: {value}")
    if not os.access(value, os.R_OK):
        raise argparse.ArgumentTypeError(f"JTL file is not readable: {value}")
    return value


class JTLSplitterCLI:
    """CLI interface for splitting and summarizing JTL result files."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self):
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            prog='jtl-splitter',
            description='Split JTL results file into warmup and measurement',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Drop the first 5 minutes and summarize both phases
  jtl-splitter split -f results.jtl -t 5 -s

  # Warmup given in seconds, delete the original file afterwards
  jtl-splitter split -f results.jtl -t 90 -u seconds -d

  # Collect summaries of several runs into one CSV
  jtl-splitter report results/ -o summary.csv

  # Plot latency per phase from the split files of results.jtl
  jtl-splitter plot -f results.jtl --output-dir plots
            """
        )
        parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        # Split command
        split_parser = subparsers.add_parser('split', help='Split a JTL file into warmup and measurement')
        split_parser.add_argument('-t', '--warmup-time', type=positive_int, required=True,
                                  help='Warmup Time')
        split_parser.add_argument('-u', '--time-unit', type=str.lower, choices=TIME_UNITS,
                                  default=DEFAULT_TIME_UNIT,
                                  help=f'Time Unit (default: {DEFAULT_TIME_UNIT})')
        split_parser.add_argument('-f', '--jtlfile', type=jtl_file, required=True,
                                  help='JTL File')
        split_parser.add_argument('-d', '--delete-jtl-file-on-exit', action='store_true',
                                  help='Delete JTL File on exit')
        split_parser.add_argument('-p', '--progress', action='store_true',
                                  help='Show progress')
        split_parser.add_argument('-s', '--summarize', action='store_true',
                                  help='Summarize results')
        split_parser.add_argument('-n', '--precision', type=non_negative_int, default=DEFAULT_PRECISION,
                                  help=f'Precision to use in statistics (default: {DEFAULT_PRECISION})')
        split_parser.add_argument('--skip-invalid-fields', action='store_true',
                                  help='Skip lines with malformed numeric or boolean fields instead of failing')

        # Report command
        report_parser = subparsers.add_parser('report', help='Collect summary JSON files into a CSV table')
        report_parser.add_argument('paths', nargs='+',
                                   help='Summary JSON files or directories containing them')
        report_parser.add_argument('-o', '--output', type=str, default=DEFAULT_REPORT_FILE,
                                   help=f'Output CSV file (default: {DEFAULT_REPORT_FILE})')

        # Plot command
        plot_parser = subparsers.add_parser('plot', help='Plot latency per phase from split files')
        plot_parser.add_argument('-f', '--jtlfile', type=str, required=True,
                                 help='JTL File the split files were created from')
        plot_parser.add_argument('-o', '--output-dir', type=str, default=DEFAULT_PLOTS_DIR,
                                 help=f'Output directory for generated plots (default: {DEFAULT_PLOTS_DIR})')

        return parser

    def run_split(self, args):
        """Run the split phase."""
        from jtl_splitter.splitter import JTLSplitter, SplitConfig, log_progress

        config = SplitConfig(
            warmup_duration=args.warmup_time,
            time_unit=args.time_unit,
            summarize=args.summarize,
            precision=args.precision,
            show_progress=args.progress,
            skip_invalid_fields=args.skip_invalid_fields,
            progress_callback=log_progress,
        )
        splitter = JTLSplitter(config)
        splitter.split_file(args.jtlfile, delete_input_on_success=args.delete_jtl_file_on_exit)
        return 0

    def run_report(self, args):
        """Run the report phase."""
        from jtl_splitter.reporting.summary_table import SummaryTable

        table = SummaryTable.from_paths(args.paths)
        table.to_csv(args.output)
        return 0

    def run_plot(self, args):
        """Run the visualization phase."""
        from jtl_splitter.visualizations.latency_plots import LatencyPlotter

        plotter = LatencyPlotter.from_jtl(args.jtlfile, args.output_dir)
        plots = plotter.create_all_plots()

        if plots:
            logger.info(f"Successfully created {len(plots)} plots in {args.output_dir}")
            for plot in plots:
                logger.info(f"  - {plot}")
            return 0
        else:
            logger.error("No plots were created")
            return 1

    def run(self, args=None):
        """Run the CLI with the given arguments."""
        if args is None:
            args = sys.argv[1:]

        parsed_args = self.parser.parse_args(args)
        configure_logging(parsed_args.verbose)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            if parsed_args.command == 'split':
                return self.run_split(parsed_args)
            elif parsed_args.command == 'report':
                return self.run_report(parsed_args)
            elif parsed_args.command == 'plot':
                return self.run_plot(parsed_args)
            else:
                logger.error(f"Unknown command: {parsed_args.command}")
                return 1

        except KeyboardInterrupt:
            logger.info("Operation interrupted by user")
            return 1
        except JTLSplitterError as e:
            logger.error(f"Error in {parsed_args.command} phase: {e}")
            return 1
        except OSError as e:
            logger.error(f"I/O error in {parsed_args.command} phase: {e}")
            return 1


def main():
    """Main entry point."""
    cli = JTLSplitterCLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
