"""
Tests for the terminal front-end.
"""

from unittest.mock import MagicMock, patch

from securepass.analyzer import PasswordAnalyzer
from securepass.models import NOT_BREACHED, BreachStatus
from securepass.password_checker import PasswordChecker
from securepass.terminal import format_report, interactive_menu, main


def printed_text(mock_print):
    return "\n".join(" ".join(str(a) for a in call.args) for call in mock_print.call_args_list)


class TestTerminal:
    """Test the interactive menu without a real terminal."""

    def setup_method(self):
        self.breach_checker = MagicMock()
        self.breach_checker.check.return_value = NOT_BREACHED
        self.analyzer = PasswordAnalyzer(breach_checker=self.breach_checker)

    def test_format_report(self):
        result = PasswordChecker.check_strength("qmwxrtkz")
        result.apply_breach(BreachStatus(True, 1500))
        report = format_report(result)
        assert "Strength:      Weak (30/100)" in report
        assert "1,500 occurrences" in report
        assert "qmwxrtkz" not in report

    @patch('builtins.print')
    @patch('securepass.terminal.getpass', return_value='Zebra#Quartz!42')
    @patch('builtins.input', side_effect=['1', '2', '5'])
    def test_analyze_and_show_json(self, mock_input, mock_getpass, mock_print):
        interactive_menu(self.analyzer)
        output = printed_text(mock_print)
        assert "Strength:" in output
        assert '"isBreached": false' in output
        assert "Zebra#Quartz!42" not in output
        self.breach_checker.check.assert_called_once_with('Zebra#Quartz!42')

    @patch('builtins.print')
    @patch('securepass.terminal.pyperclip.copy')
    @patch('securepass.terminal.getpass', return_value='qmwxrtkz')
    @patch('builtins.input', side_effect=['3', '1', '3', '4', '5'])
    def test_copy_report_and_clear_cache(self, mock_input, mock_getpass, mock_copy, mock_print):
        interactive_menu(self.analyzer)
        output = printed_text(mock_print)
        assert "Nothing analyzed yet." in output
        mock_copy.assert_called_once()
        assert "Strength:" in mock_copy.call_args[0][0]
        self.breach_checker.cache.clear.assert_called_once()

    @patch('builtins.print')
    @patch('builtins.input', side_effect=KeyboardInterrupt)
    def test_main_exits_cleanly(self, mock_input, mock_print):
        main()
        assert "Goodbye!" in printed_text(mock_print)
