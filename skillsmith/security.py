"""Security scanner - pattern-based risk assessment for skill bodies.

Findings are data: nothing here raises on dangerous content, the caller
decides what to do with `blocked`.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Pattern

from .config import MAX_SHELL_BLOCKS, MAX_SKILL_SIZE, NEGATION_WINDOW
from .models import QuickCheckResult, SecurityFinding, SecurityScanResult

logger = logging.getLogger(__name__)

RISK_LEVELS = ("low", "medium", "high", "critical")
SEVERITY_RISK = {"critical": "critical", "danger": "high", "warning": "medium"}


@dataclass(frozen=True)
class Rule:
    pattern: Pattern[str]
    message: str
    severity: str  # "critical" | "danger" | "warning" | "info"
    exemptable: bool = False


def _rule(pattern: str, message: str, severity: str, exemptable: bool = False, flags: int = 0) -> Rule:
    return Rule(re.compile(pattern, flags), message, severity, exemptable)


DANGEROUS_RULES = (
    # Destructive system commands
    _rule(r"rm\s+-(?:rf|fr)\s+[/~]", "Destructive delete command (rm -rf)", "critical"),
    _rule(r"sudo\s+rm\b", "Privileged delete command (sudo rm)", "critical"),
    _rule(r"\bmkfs\b|\bfdisk\b|\bdd\s+if=", "Disk formatting or raw disk write", "critical"),
    _rule(r":\(\)\s*\{\s*:\s*\|\s*:\s*&\s*\}\s*;\s*:", "Fork bomb", "critical"),
    # Credential theft
    _rule(r"\.ssh/|\bid_rsa\b|\bid_ed25519\b", "Reads SSH keys", "critical"),
    _rule(r"\.aws/credentials|(?<![\w.])\.env\b", "Reads credential or environment files", "critical"),
    _rule(r"keychain|password|credential", "Mentions credential handling", "warning", True, re.I),
    # Remote execution
    _rule(r"\b(?:curl|wget)\b[^\n|]*\|\s*(?:sudo\s+)?(?:ba|z)?sh\b", "Pipes a remote script into a shell", "critical"),
    _rule(r"\bnc\s+-e\b|\bnetcat\b[^\n]*\s-e\b|/dev/tcp/", "Reverse shell construct", "critical"),
    _rule(r"base64\s+(?:-d|--decode)\b[^\n]*\|\s*(?:ba|z)?sh\b", "Executes base64-decoded commands", "critical"),
    # Exfiltration
    _rule(r"\bcurl\b[^\n]*\s-d\s[^\n]*\$\(|\bwget\b[^\n]*--post-data", "Possible data exfiltration via POST", "danger"),
    _rule(r"exfil|upload[^\n]*secret|send[^\n]*token", "Data transfer vocabulary", "warning", True, re.I),
    # Prompt injection
    _rule(r"</?(?:system|user|assistant)>", "Conversation role tags", "danger", flags=re.I),
    _rule(r"ignore\s+(?:all\s+)?(?:previous|above|prior)\s+instructions", "Prompt injection attempt", "critical", flags=re.I),
    _rule(r"you\s+are\s+now\s+(?:a|an)\s+", "Role reassignment phrasing", "warning", True, re.I),
    # Privilege escalation
    _rule(r"chmod\s+(?:777|\+s)\b", "Dangerous permission change", "danger"),
    _rule(r"sudo\s+(?:su\b|-i\b)", "Attempts to get a root shell", "warning", True),
    # Obfuscation
    _rule(r"eval\s*\(\s*(?:atob|String\.fromCharCode)", "Obfuscated eval", "danger"),
    _rule(r"(?:\\x[0-9a-f]{2}){3}", "Hex-escaped payload", "warning", True, re.I),
)

SUSPICIOUS_RULES = (
    _rule(r"\b(?:curl|wget|fetch)\b", "Makes network requests", "info"),
    _rule(r"\b(?:eval|exec)\b", "Executes dynamic code", "info"),
    _rule(r"\$\([^)\n]*\)", "Uses command substitution", "info"),
    _rule(r"/(?:etc|var|usr)/", "Touches system directories", "info"),
    _rule(r"\b(?:npm|pip)\s+install\b", "Installs external packages", "info"),
)

_NEGATION = re.compile(r"\b(?:don't|do not|never|avoid|warning)\b|禁止|不要|避免|切勿", re.I)
_SHELL_BLOCK = re.compile(r"```(?:bash|sh|shell|zsh)\b")


class SecurityScanner:
    """Run every rule over a body and fold the hits into one verdict"""

    def scan(self, content: str) -> SecurityScanResult:
        content = content or ""
        result = SecurityScanResult()
        risk = "low"

        for rule in DANGEROUS_RULES:
            hit = self._match(rule, content)
            if hit is None:
                continue

            if hit == "code":
                result.details.append(
                    SecurityFinding("dangerous", f"{rule.message} (found in code example)", "info")
                )
                continue

            result.warnings.append(rule.message)
            result.details.append(SecurityFinding("dangerous", rule.message, rule.severity))
            risk = _raise_risk(risk, SEVERITY_RISK[rule.severity])
            if rule.severity == "critical":
                result.blocked = True

        for rule in SUSPICIOUS_RULES:
            if rule.pattern.search(content):
                result.details.append(SecurityFinding("suspicious", rule.message, "info"))

        if len(content) > MAX_SKILL_SIZE:
            result.warnings.append(f"Content is larger than {MAX_SKILL_SIZE} characters")
            result.details.append(
                SecurityFinding("size", "Oversized content may hide instructions", "warning")
            )
            risk = _raise_risk(risk, "medium")

        shell_blocks = len(_SHELL_BLOCK.findall(content))
        if shell_blocks > MAX_SHELL_BLOCKS:
            result.warnings.append("Excessive shell command blocks")
            result.details.append(
                SecurityFinding("commands", f"Contains {shell_blocks} shell command blocks", "warning")
            )

        result.risk = risk
        result.safe = risk == "low" and not result.warnings

        if result.blocked:
            logger.warning("Blocked content: %s", "; ".join(result.warnings))
        else:
            logger.debug("Scan finished: risk=%s, %d finding(s)", risk, len(result.details))
        return result

    def quick_check(self, content: str) -> QuickCheckResult:
        """Critical and danger tiers only, without exemptions."""
        content = content or ""
        for severity, risk in (("critical", "critical"), ("danger", "high")):
            for rule in DANGEROUS_RULES:
                if rule.severity == severity and rule.pattern.search(content):
                    return QuickCheckResult(safe=False, risk=risk)
        return QuickCheckResult(safe=True, risk="low")

    def _match(self, rule: Rule, content: str) -> Optional[str]:
        """Return "hit", "code" (only inside code examples) or None."""
        if not rule.exemptable:
            return "hit" if rule.pattern.search(content) else None

        in_code = False
        for m in rule.pattern.finditer(content):
            start = m.start()
            if _NEGATION.search(content[max(0, start - NEGATION_WINDOW):start]):
                continue
            if content.count("```", 0, start) % 2 == 1:
                in_code = True
                continue
            return "hit"
        return "code" if in_code else None


def _raise_risk(current: str, candidate: str) -> str:
    return max(current, candidate, key=RISK_LEVELS.index)


def scan_security(content: str) -> SecurityScanResult:
    return SecurityScanner().scan(content)


def quick_security_check(content: str) -> QuickCheckResult:
    return SecurityScanner().quick_check(content)


__all__ = [
    "DANGEROUS_RULES",
    "SUSPICIOUS_RULES",
    "SecurityScanner",
    "quick_security_check",
    "scan_security",
]
