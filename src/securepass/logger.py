"""
Security logging for audit trail.
"""

import logging
import os
from typing import Optional

class SecurityLogger:
    """Log security-relevant events. Never receives plaintext passwords."""
    
    def __init__(self, log_file: Optional[str] = None):
        self.logger = logging.getLogger('securepass_security')
        self.logger.setLevel(logging.INFO)
        
        if log_file is None:
            log_file = os.environ.get("SECUREPASS_AUDIT_LOG", "securepass_audit.log")
        self.log_file = log_file
        
        # File handler
        fh = logging.FileHandler(log_file)
        fh.setLevel(logging.INFO)
        
        # Formatter
        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        fh.setFormatter(formatter)
        
        self.logger.addHandler(fh)
        self._handler = fh
    
    def log_analysis(self, strength: str, score: int, breached: Optional[bool] = None,
                     user_id: Optional[str] = None):
        """Log a completed password analysis."""
        user_info = f" for user {user_id}" if user_id else ""
        breach_info = ""
        if breached is not None:
            breach_info = " - BREACHED" if breached else " - not breached"
        self.logger.info(f"Password analysis{user_info}: {strength} ({score}){breach_info}")
    
    def log_breach_lookup(self, prefix: str, outcome: str):
        """Log a breach range lookup. Only the 5-character hash prefix is recorded."""
        self.logger.info(f"Breach lookup for range {prefix} - {outcome}")
    
    def log_security_event(self, event: str, details: str = ""):
        """Log general security events."""
        details_str = f" - {details}" if details else ""
        self.logger.warning(f"Security event: {event}{details_str}")
    
    def close(self):
        """Detach and close the file handler."""
        self.logger.removeHandler(self._handler)
        self._handler.close()

# Global logger instance
security_logger = SecurityLogger()
