"""
Tests for the command-line interface.
"""

import os
import sys
import tempfile
import unittest

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jtl_splitter.cli import JTLSplitterCLI
from jtl_splitter.splitter import output_paths

HEADER = "timeStamp,elapsed,label,responseCode,responseMessage,threadName,dataType,success,failureMessage,bytes,sentBytes"


def make_line(timestamp, elapsed=100):
    return f"{timestamp},{elapsed},req,200,OK,t1,text,true,,1024,256,1,1,http://host/,40,0"


class TestJTLSplitterCLI(unittest.TestCase):
    """Test argument handling and exit codes."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.jtl_path = os.path.join(self.tmpdir.name, "run.jtl")
        self.cli = JTLSplitterCLI()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write_jtl(self, lines):
        with open(self.jtl_path, "w") as f:
            f.write("\n".join(lines) + "\n")

    def test_split_command(self):
        self.write_jtl([HEADER, make_line(1000), make_line(2000), make_line(5000)])

        code = self.cli.run(["split", "-f", self.jtl_path, "-t", "2", "-u", "SECONDS", "-s", "-n", "3"])

        self.assertEqual(code, 0)
        paths = output_paths(self.jtl_path)
        for path in (paths.warmup, paths.measurement, paths.warmup_summary, paths.measurement_summary):
            self.assertTrue(os.path.exists(path), path)

    def test_split_deletes_input(self):
        self.write_jtl([HEADER, make_line(1000)])
        code = self.cli.run(["split", "--jtlfile", self.jtl_path, "--warmup-time", "1",
                             "--delete-jtl-file-on-exit", "--progress"])
        self.assertEqual(code, 0)
        self.assertFalse(os.path.exists(self.jtl_path))

    def test_invalid_field_exits_with_error(self):
        self.write_jtl([HEADER, make_line(1000), make_line("x")])

        with self.assertLogs(level='ERROR') as cm:
            code = self.cli.run(["split", "-f", self.jtl_path, "-t", "1", "-d"])

        self.assertEqual(code, 1)
        self.assertTrue(os.path.exists(self.jtl_path))
        self.assertIn("not a valid integer", "\n".join(cm.output))

    def test_skip_invalid_fields_flag(self):
        self.write_jtl([HEADER, make_line(1000), make_line("x")])
        code = self.cli.run(["split", "-f", self.jtl_path, "-t", "1", "--skip-invalid-fields"])
        self.assertEqual(code, 0)

    def test_missing_file_rejected(self):
        with self.assertRaises(SystemExit) as cm:
            self.cli.run(["split", "-f", os.path.join(self.tmpdir.name, "none.jtl"), "-t", "1"])
        self.assertEqual(cm.exception.code, 2)

    def test_non_positive_warmup_rejected(self):
        self.write_jtl([HEADER])
        with self.assertRaises(SystemExit):
            self.cli.run(["split", "-f", self.jtl_path, "-t", "0"])

    def test_negative_precision_rejected(self):
        self.write_jtl([HEADER])
        with self.assertRaises(SystemExit):
            self.cli.run(["split", "-f", self.jtl_path, "-t", "1", "-n", "-1"])

    def test_unknown_time_unit_rejected(self):
        self.write_jtl([HEADER])
        with self.assertRaises(SystemExit):
            self.cli.run(["split", "-f", self.jtl_path, "-t", "1", "-u", "weeks"])

    def test_no_command(self):
        self.assertEqual(self.cli.run([]), 1)

    def test_report_command(self):
        self.write_jtl([HEADER, make_line(1000), make_line(200000)])
        self.assertEqual(self.cli.run(["split", "-f", self.jtl_path, "-t", "1", "-s"]), 0)

        output = os.path.join(self.tmpdir.name, "out", "summary.csv")
        code = self.cli.run(["report", self.tmpdir.name, "-o", output])

        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(output))

    def test_report_without_summaries(self):
        code = self.cli.run(["report", self.tmpdir.name, "-o", os.path.join(self.tmpdir.name, "s.csv")])
        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
