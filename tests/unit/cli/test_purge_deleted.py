"""Unit tests for the purge command line."""

import pytest

from scripts.purge_deleted import main


class TestPurgeDeletedCli:
    """Tests for argument handling in purge_deleted.main."""

    @pytest.mark.parametrize("argv", [["soon"], ["1.5"], ["7", "8"]])
    def test_bad_arguments_print_usage(self, argv, capsys):
        # Act
        exit_code = main(argv)

        # Assert
        assert exit_code == 2
        assert "usage: purge_deleted.py" in capsys.readouterr().err
