"""
Audit Recommendation Configuration

Minimal configuration surface for the evidence-gated recommendation pipeline.
Values are read once at import so every render in a process sees the same
thresholds; callers that need different values pass explicit overrides.
"""

import os
from typing import Dict

from dotenv import load_dotenv

load_dotenv()


class AuditConfig:
    """Rendering thresholds, gating constants and ranking weights."""

    # Failing-subfactor selection
    RECOMMENDATION_SCORE_THRESHOLD = int(os.getenv("AUDIT_SCORE_THRESHOLD", "70"))
    MAX_RECOMMENDATIONS = int(os.getenv("AUDIT_MAX_RECOMMENDATIONS", "12"))
    NOISE_GAP = float(os.getenv("AUDIT_NOISE_GAP", "10"))

    # Generation hooks
    HOOK_TIMEOUT_SECONDS = float(os.getenv("AUDIT_HOOK_TIMEOUT", "20"))

    # Output hygiene
    VALIDATE_PLACEHOLDERS = os.getenv("AUDIT_VALIDATE_PLACEHOLDERS", "true").lower() != "false"
    LOG_LEVEL = os.getenv("AUDIT_LOG_LEVEL", "INFO").upper()

    # Evidence gating
    CONFIDENCE_STRONG = 0.85
    CONFIDENCE_MEDIUM = 0.6
    CONFIDENCE_WEAK = 0.4
    CONFIDENCE_AMBIGUOUS = 0.35
    CONTEXT_CONFIDENCE_BOOST = 0.05
    STRONG_COVERAGE = 0.8
    MEDIUM_COVERAGE = 0.5
    FAQ_SUSPICIOUS_RATIO = 0.5

    # Ranking
    PRIORITY_WEIGHTS: Dict[str, int] = {
        "P0": 100,
        "P1": 50,
        "P2": 25,
    }
    IMPACT_WEIGHTS: Dict[str, int] = {
        "High": 40,
        "Med-High": 30,
        "Med": 20,
        "Low-Med": 10,
    }

    # Digest output
    DIGEST_OUTPUT_DIR = os.getenv("AUDIT_DIGEST_DIR", "recommendation_digests")


__all__ = ["AuditConfig"]
