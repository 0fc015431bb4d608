import os
import sys
import tempfile

# Keep the audit log out of the working tree during tests
os.environ.setdefault(
    "SECUREPASS_AUDIT_LOG", os.path.join(tempfile.mkdtemp(prefix="securepass-"), "audit.log")
)

# Add src to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), os.pardir, "src"))
