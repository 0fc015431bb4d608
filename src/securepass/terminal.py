#!/usr/bin/env python3
"""
SecurePass - terminal password analyzer.
Strength scoring with k-anonymity breach lookup.
"""

import json
from getpass import getpass
from typing import Optional

import pyperclip

from .analyzer import PasswordAnalyzer
from .breach_checker import BreachChecker
from .models import AnalysisRequest, AnalysisResult


def print_banner():
    """Display application banner."""
    banner = """
    ╔═══════════════════════════════════════╗
    ║          S E C U R E P A S S          ║
    ║     Password Strength Analyzer v1.0   ║
    ╚═══════════════════════════════════════╝
    """
    print(banner)


def format_report(result: AnalysisResult) -> str:
    """Human-readable report. Contains no part of the password."""
    lines = [
        f"Strength:      {result.strength} ({result.score}/100)",
        f"Entropy:       {round(result.entropy, 1)} bits",
        f"Time to crack: {result.crack_time}",
    ]
    if result.is_breached is not None:
        if result.is_breached:
            lines.append(f"Breached:      yes ({result.breach_count:,} occurrences)")
        else:
            lines.append("Breached:      not found")
    lines.append("")
    lines.append("Suggestions:")
    lines.extend(f"  - {s}" for s in result.suggestions)
    return "\n".join(lines)


def interactive_menu(analyzer: PasswordAnalyzer):
    """Interactive command-line interface."""
    last_result: Optional[AnalysisResult] = None

    while True:
        print("\n" + "="*50)
        print("MAIN MENU")
        print("="*50)
        print("1. Analyze a password")
        print("2. Show last report as JSON")
        print("3. Copy last report to clipboard")
        print("4. Clear breach cache")
        print("5. Exit")

        choice = input("\nSelect option (1-5): ").strip()

        if choice == "1":
            password = getpass("Password (hidden): ")
            last_result = analyzer.analyze(AnalysisRequest(password))
            print()
            print(format_report(last_result))

        elif choice == "2":
            if last_result is None:
                print("Nothing analyzed yet.")
            else:
                print(json.dumps(last_result.to_dict(), indent=2, ensure_ascii=False))

        elif choice == "3":
            if last_result is None:
                print("Nothing analyzed yet.")
                continue
            try:
                pyperclip.copy(format_report(last_result))
                print("✓ Report copied to clipboard")
            except pyperclip.PyperclipException as e:
                print(f"Clipboard unavailable: {e}")

        elif choice == "4":
            if analyzer.breach_checker is not None:
                analyzer.breach_checker.cache.clear()
            print("Breach cache cleared")

        elif choice == "5":
            print("Goodbye!")
            break

        else:
            print("Invalid choice. Please try again.")


def main():
    """Main application entry point."""
    print_banner()
    analyzer = PasswordAnalyzer(breach_checker=BreachChecker())
    try:
        interactive_menu(analyzer)
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye!")


if __name__ == "__main__":
    main()
