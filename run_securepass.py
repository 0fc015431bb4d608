#!/usr/bin/env python3
"""
Simple runner script for the SecurePass terminal analyzer.
This allows running from project root without installing.
Pass "serve" to start the development web server instead.
"""
import sys
import os

# Add src to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

try:
    if len(sys.argv) > 1 and sys.argv[1] == "serve":
        from securepass.web import run_server as main
    else:
        from securepass.terminal import main
    main()
except ImportError as e:
    print(f"Error importing SecurePass: {e}")
    print("Make sure you're in the project root directory")
    sys.exit(1)
