"""Tests for the CLI frontend."""

import argparse
from unittest.mock import Mock, patch
from io import StringIO

import pytest
from lifeuniverse.core.universe import Universe
from lifeuniverse.frontends.cli import (
    CLIUniverse,
    create_parser,
    parse_toggle,
    print_results,
    validate_args,
    main,
)


class TestCLIUniverse:
    """Test cases for the console driver."""

    def test_initialization(self):
        """Test CLI initialization."""
        cli = CLIUniverse()
        assert len(cli.pattern_library.list_patterns()) > 0

    def test_build_default_universe(self):
        """Test the default seeded universe is used without a pattern."""
        universe = CLIUniverse().build_universe(8, 6)
        assert universe == Universe.new(8, 6)

    def test_build_with_pattern(self):
        """Test a pattern is placed on an empty universe."""
        universe = CLIUniverse().build_universe(10, 10, pattern="Block", row=4, column=5)
        assert universe.alive_cells() == [(4, 5), (4, 6), (5, 5), (5, 6)]

    @patch("sys.stdout", new_callable=StringIO)
    def test_build_with_unknown_pattern(self, mock_stdout):
        """Test an unknown pattern falls back to the default seed."""
        universe = CLIUniverse().build_universe(5, 5, pattern="Nope")
        assert universe == Universe.new(5, 5)
        assert "not found" in mock_stdout.getvalue()

    def test_build_with_toggles(self):
        """Test toggles are applied after seeding."""
        universe = CLIUniverse().build_universe(6, 6, pattern="Block", toggles=[(0, 0), (3, 3)])
        assert universe.alive_cells() == [(0, 1), (1, 0), (1, 1), (3, 3)]

    def test_build_empty(self):
        """Test an empty universe can be requested."""
        universe = CLIUniverse().build_universe(6, 6, toggles=[(2, 1)], empty=True)
        assert universe.alive_cells() == [(2, 1)]

    def test_build_rejects_bad_toggle(self):
        """Test out-of-range toggles fail loudly."""
        with pytest.raises(IndexError):
            CLIUniverse().build_universe(4, 4, toggles=[(4, 0)])

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_blinker(self, mock_stdout):
        """Test the blinker scenario through the driver."""
        cli = CLIUniverse()
        universe = cli.build_universe(6, 6, pattern="Blinker", row=1, column=1)

        stats = cli.run(universe, generations=2)

        assert stats["generation"] == 2
        assert stats["population"] == 3
        assert stats["initial_population"] == 3
        assert stats["grid_size"] == (6, 6)
        assert universe.alive_cells() == [(2, 1), (2, 2), (2, 3)]

        output = mock_stdout.getvalue()
        assert "Generation 0" in output
        assert "Generation 1" in output
        assert "Generation 2" in output
        assert output.count("\n") == 3 + 3 * 6

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_quiet(self, mock_stdout):
        """Test nothing is printed when show is off."""
        CLIUniverse().run(Universe.new(5, 5), generations=3, show=False)
        assert mock_stdout.getvalue() == ""

    @patch("lifeuniverse.frontends.cli.time.sleep")
    def test_run_with_delay(self, mock_sleep):
        """Test the delay is applied between generations."""
        CLIUniverse().run(Universe(4, 4), generations=3, delay=0.25, show=False)
        assert mock_sleep.call_count == 3
        mock_sleep.assert_called_with(0.25)

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_patterns(self, mock_stdout):
        """Test pattern listing."""
        CLIUniverse().list_patterns()

        output = mock_stdout.getvalue()
        assert "Available patterns:" in output
        assert "Block" in output
        assert "Still Life:" in output
        assert "Oscillators:" in output


class TestArgumentParsing:
    """Test command-line argument parsing."""

    def test_defaults(self):
        """Test parser defaults."""
        args = create_parser().parse_args([])
        assert args.width == 64
        assert args.height == 64
        assert args.generations == 10
        assert args.pattern is None
        assert args.toggle == []
        assert args.delay == 0.0
        assert not args.quiet

    def test_parse_short_args(self):
        """Test short options."""
        args = create_parser().parse_args(["-W", "6", "-H", "5", "-g", "2", "-p", "Glider", "-q"])
        assert (args.width, args.height, args.generations) == (6, 5, 2)
        assert args.pattern == "Glider"
        assert args.quiet

    def test_parse_toggles(self):
        """Test repeated toggles."""
        args = create_parser().parse_args(["--toggle", "2,1", "--toggle", "2,2"])
        assert args.toggle == [(2, 1), (2, 2)]

    def test_parse_toggle_invalid(self):
        """Test malformed toggles are rejected."""
        with pytest.raises(argparse.ArgumentTypeError):
            parse_toggle("2")
        with pytest.raises(argparse.ArgumentTypeError):
            parse_toggle("a,b")

    def test_validate_args_valid(self):
        """Test validation with valid arguments."""
        args = create_parser().parse_args(["-W", "6", "-H", "6", "--toggle", "5,5"])
        assert validate_args(args)

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_args_invalid(self, mock_stdout):
        """Test validation catches each bad value."""
        for argv in (["-W", "0"], ["-H", "-1"], ["-g", "-1"], ["--delay", "-0.5"], ["--row", "-1"]):
            assert not validate_args(create_parser().parse_args(argv))

        assert "Error: Invalid arguments:" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_args_toggle_out_of_range(self, mock_stdout):
        """Test toggles outside the grid are rejected before running."""
        args = create_parser().parse_args(["-W", "4", "-H", "4", "--toggle", "4,0"])
        assert not validate_args(args)
        assert "outside" in mock_stdout.getvalue()


class TestOutput:
    """Test result printing."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_results(self, mock_stdout):
        """Test the run summary."""
        print_results(
            {
                "generation": 20,
                "population": 8,
                "initial_population": 10,
                "grid_size": (30, 20),
                "duration_seconds": 0.5,
                "generations_per_second": 40.0,
            }
        )

        output = mock_stdout.getvalue()
        assert "Ran 20 generations on a 30x20 universe" in output
        assert "Population: 10 -> 8" in output
        assert "Speed: 40 gen/s" in output


class TestMainFunction:
    """Test the main CLI function."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_blinker_scenario(self, mock_stdout):
        """Test a full run from the command line."""
        result = main(
            ["-W", "6", "-H", "6", "--empty", "--toggle", "2,1", "--toggle", "2,2", "--toggle", "2,3", "-g", "2"]
        )

        assert result == 0
        assert "Population: 3 -> 3" in mock_stdout.getvalue()

    @patch("lifeuniverse.frontends.cli.CLIUniverse")
    def test_main_list_patterns(self, mock_cli_class):
        """Test main function with --list-patterns."""
        mock_cli = Mock()
        mock_cli_class.return_value = mock_cli

        result = main(["--list-patterns"])

        assert result == 0
        mock_cli.list_patterns.assert_called_once()
        mock_cli.run.assert_not_called()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_args(self, mock_stdout):
        """Test main function with invalid arguments."""
        assert main(["--width", "-5"]) == 1

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_pattern(self, mock_stdout):
        """Test main function with an unknown pattern."""
        assert main(["--pattern", "InvalidPattern"]) == 1
        assert "not found" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    @patch("lifeuniverse.frontends.cli.CLIUniverse")
    def test_main_keyboard_interrupt(self, mock_cli_class, mock_stdout):
        """Test handling of keyboard interrupt."""
        mock_cli = Mock()
        mock_cli.run.side_effect = KeyboardInterrupt()
        mock_cli_class.return_value = mock_cli

        assert main(["-q"]) == 1
        assert "Interrupted" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    @patch("lifeuniverse.frontends.cli.CLIUniverse")
    def test_main_setup_error(self, mock_cli_class, mock_stdout):
        """Test setup errors are reported with a non-zero exit code."""
        mock_cli = Mock()
        mock_cli.build_universe.side_effect = ValueError("bad universe")
        mock_cli_class.return_value = mock_cli

        assert main([]) == 1
        assert "Error: bad universe" in mock_stdout.getvalue()
