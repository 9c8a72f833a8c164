"""
Tests for the command-line interface.
"""

import pytest
import tempfile
from pathlib import Path
from unittest.mock import patch

from alncut.cli import build_parser, log_invocation, main as cli_main, setup_logging


class TestMainCLI:
    """Test suite for the alncut CLI."""

    def setup_method(self):
        """Set up test fixtures."""
        self.test_sequences = {
            "seq_0": "ACGT-A",
            "seq_1": "ACGA-A",
            "seq_2": "ACGT-C",
            "seq_3": "ACCT-C",
        }

    def _create_test_fasta(self, sequences, filepath):
        """Helper to create test FASTA file."""
        with open(filepath, 'w') as f:
            for header, seq in sequences.items():
                f.write(f">{header}\n{seq}\n")

    def test_setup_logging_verbose(self):
        """Test logging setup with verbose mode."""
        with patch('alncut.cli.logging.basicConfig') as mock_config:
            setup_logging(verbose=True)
            mock_config.assert_called_once()
            args, kwargs = mock_config.call_args
            assert kwargs['level'] == 10  # logging.DEBUG

    def test_setup_logging_normal(self):
        """Test logging setup with normal mode."""
        with patch('alncut.cli.logging.basicConfig') as mock_config:
            setup_logging(verbose=False)
            mock_config.assert_called_once()
            args, kwargs = mock_config.call_args
            assert kwargs['level'] == 20  # logging.INFO

    @patch('sys.argv', ['alncut', '--help'])
    def test_cli_help_message(self):
        """Test that CLI shows help message."""
        with pytest.raises(SystemExit) as exc_info:
            cli_main()
        assert exc_info.value.code == 0

    def test_cli_version(self, capsys):
        """--version prints the program version."""
        with pytest.raises(SystemExit) as exc_info:
            cli_main(['--version'])
        assert exc_info.value.code == 0
        assert "alncut" in capsys.readouterr().out

    def test_parser_flags(self):
        """Short and long flags map onto the same options."""
        args = build_parser().parse_args(['-g', '-a', '-p', '-v', '-V', '-f', '2', 'x.fasta'])
        assert args.gapfree and args.allgap and args.parsinf
        assert args.negate and args.verbose
        assert args.frequency == 2.0
        assert args.inputs == ['x.fasta']
        assert args.format == 'fasta'

    @pytest.mark.parametrize("frequency", ["0", "1.5", "-2", "abc"])
    def test_cli_invalid_frequency(self, frequency, capsys):
        """Invalid frequencies abort before any processing."""
        with pytest.raises(SystemExit) as exc_info:
            cli_main(['-f', frequency, 'whatever.fasta'])
        assert exc_info.value.code == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Frequency" in captured.err

    def test_cli_invalid_moltype(self, capsys):
        """Unknown molecule types abort before any processing."""
        with pytest.raises(SystemExit) as exc_info:
            cli_main(['-m', 'peptide', 'whatever.fasta'])
        assert exc_info.value.code == 2
        assert capsys.readouterr().out == ""

    def test_cli_invariant_sites(self, capsys):
        """Default run writes invariant columns to stdout."""
        with tempfile.TemporaryDirectory() as tmpdir:
            input_fasta = Path(tmpdir) / "input.fasta"
            self._create_test_fasta(self.test_sequences, input_fasta)

            cli_main([str(input_fasta)])

        captured = capsys.readouterr()
        assert captured.out == ">seq_0\nAC-\n>seq_1\nAC-\n>seq_2\nAC-\n>seq_3\nAC-\n"

    def test_cli_variable_sites_with_report(self, capsys):
        """Negated run with a count cutoff reports matching indices on stderr."""
        with tempfile.TemporaryDirectory() as tmpdir:
            input_fasta = Path(tmpdir) / "input.fasta"
            self._create_test_fasta(self.test_sequences, input_fasta)

            cli_main(['-v', '-f', '1', '-V', str(input_fasta)])

        captured = capsys.readouterr()
        assert captured.out == ">seq_0\nA\n>seq_1\nA\n>seq_2\nC\n>seq_3\nC\n"
        assert "# alncut matched 1 non-invariant sites.\n" in captured.err
        assert "# A relative frequency cutoff of 0.2500 gaps or variants was allowed.\n" in captured.err
        assert "# Matching indices (zero-based):\n5\n" in captured.err

    def test_cli_remove_all_gap_sites(self, capsys):
        """-a -v drops all-gap columns."""
        with tempfile.TemporaryDirectory() as tmpdir:
            input_fasta = Path(tmpdir) / "input.fasta"
            self._create_test_fasta(self.test_sequences, input_fasta)

            cli_main(['-a', '-v', str(input_fasta)])

        out = capsys.readouterr().out
        assert ">seq_0\nACGTA\n" in out
        assert ">seq_3\nACCTC\n" in out

    def test_cli_parsimony_precedence(self, capsys):
        """-p wins over -g and -a."""
        with tempfile.TemporaryDirectory() as tmpdir:
            input_fasta = Path(tmpdir) / "input.fasta"
            self._create_test_fasta(self.test_sequences, input_fasta)

            cli_main(['-g', '-a', '-p', '-V', str(input_fasta)])

        captured = capsys.readouterr()
        assert ">seq_0\nA\n" in captured.out
        assert "# alncut matched 1 parsimoniously informative sites.\n" in captured.err

    def test_cli_missing_input_file(self, capsys):
        """A missing file is skipped and later files are still processed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            input_fasta = Path(tmpdir) / "input.fasta"
            self._create_test_fasta(self.test_sequences, input_fasta)

            cli_main([str(Path(tmpdir) / "nonexistent.fasta"), str(input_fasta)])

        assert ">seq_0\nAC-\n" in capsys.readouterr().out

    def test_cli_length_mismatch_exit_code(self, capsys):
        """A ragged alignment makes the run exit with status 1."""
        with tempfile.TemporaryDirectory() as tmpdir:
            ragged = Path(tmpdir) / "ragged.fasta"
            ragged.write_text(">a\nACGT\n>b\nAC\n")
            input_fasta = Path(tmpdir) / "input.fasta"
            self._create_test_fasta(self.test_sequences, input_fasta)

            with pytest.raises(SystemExit) as exc_info:
                cli_main([str(ragged), str(input_fasta)])

        assert exc_info.value.code == 1
        assert ">seq_0\nAC-\n" in capsys.readouterr().out

    def test_cli_invocation_log(self, capsys):
        """--log appends the command line and comment to the logfile."""
        with tempfile.TemporaryDirectory() as tmpdir:
            input_fasta = Path(tmpdir) / "input.fasta"
            self._create_test_fasta(self.test_sequences, input_fasta)
            logfile = Path(tmpdir) / "invocations.txt"

            cli_main(['-l', '-L', str(logfile), '-C', 'first pass', str(input_fasta)])
            cli_main(['-l', '-L', str(logfile), '-g', str(input_fasta)])

            lines = logfile.read_text().splitlines()

        assert len(lines) == 2
        assert "alncut -l -L" in lines[0]
        assert lines[0].endswith("# first pass")
        assert " -g " in lines[1]

    def test_log_invocation_quotes_arguments(self):
        """Arguments with spaces are quoted in the logfile."""
        with tempfile.TemporaryDirectory() as tmpdir:
            logfile = Path(tmpdir) / "log.txt"
            log_invocation(str(logfile), ['alncut', 'my file.fasta'])
            assert "alncut 'my file.fasta'" in logfile.read_text()

    def test_cli_logs_invoked_program_name(self):
        """The logfile records the program name the tool was invoked as."""
        with tempfile.TemporaryDirectory() as tmpdir:
            input_fasta = Path(tmpdir) / "input.fasta"
            self._create_test_fasta(self.test_sequences, input_fasta)
            logfile = Path(tmpdir) / "invocations.txt"

            with patch('sys.argv', ['/opt/bin/alncut-dev', '-l', '-L', str(logfile), str(input_fasta)]):
                cli_main()

            text = logfile.read_text()

        assert "/opt/bin/alncut-dev -l -L" in text

    def test_cli_directory_input_exit_code(self, capsys):
        """A directory given as input fails alone and sets exit status 1."""
        with tempfile.TemporaryDirectory() as tmpdir:
            subdir = Path(tmpdir) / "subdir"
            subdir.mkdir()
            input_fasta = Path(tmpdir) / "input.fasta"
            self._create_test_fasta(self.test_sequences, input_fasta)

            with pytest.raises(SystemExit) as exc_info:
                cli_main([str(subdir), str(input_fasta)])

        assert exc_info.value.code == 1
        assert ">seq_0\nAC-\n" in capsys.readouterr().out

    def test_cli_allgap_stockholm_without_gap_columns(self, capsys):
        """Stockholm files with no all-gap columns are reported but not written."""
        with tempfile.TemporaryDirectory() as tmpdir:
            first = Path(tmpdir) / "first.sto"
            first.write_text("# STOCKHOLM 1.0\nx AC\ny AG\n//\n")
            second = Path(tmpdir) / "second.sto"
            second.write_text("# STOCKHOLM 1.0\nx TT\ny TA\n//\n")

            cli_main(['-r', 'stockholm', '-a', '-V', str(first), str(second)])

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.count("matched 0 all-gap sites.") == 2
