"""
Enhanced Logging System for Grammar Police
==========================================

Provides visual, colored, structured logging with phase tracking for each
correction request.
IMPORTANT: No emojis in console output (Windows encoding issues).
"""

import logging
import time
from typing import Optional, Dict, Any
from contextlib import contextmanager
from datetime import datetime
from colorama import Fore, Style, init

# Initialize colorama for Windows
init(autoreset=True)

# Phase definitions
class Phase:
    """Phase constants for the correction pipeline"""
    REQUEST_VALIDATION = "REQUEST_VALIDATION"
    MODEL_CALL = "MODEL_CALL"
    COMPLETION = "COMPLETION"

# Phase colors
PHASE_COLORS = {
    Phase.REQUEST_VALIDATION: Fore.CYAN,
    Phase.MODEL_CALL: Fore.YELLOW,
    Phase.COMPLETION: Fore.GREEN + Style.BRIGHT,
}

# Phase icons (text-based, no emojis for Windows)
PHASE_ICONS = {
    Phase.REQUEST_VALIDATION: "[REQ]",
    Phase.MODEL_CALL: "[LLM]",
    Phase.COMPLETION: "[OK ]",
}


class TimingTracker:
    """Track timing for phases and operations"""

    def __init__(self):
        self._timings: Dict[str, float] = {}
        self._start_times: Dict[str, float] = {}

    def start(self, key: str):
        """Start timing for a key"""
        self._start_times[key] = time.time()

    def end(self, key: str) -> float:
        """End timing and return elapsed seconds"""
        if key not in self._start_times:
            return 0.0
        elapsed = time.time() - self._start_times[key]
        self._timings[key] = elapsed
        del self._start_times[key]
        return elapsed

    def get(self, key: str) -> Optional[float]:
        """Get timing for a key"""
        return self._timings.get(key)

    def get_all(self) -> Dict[str, float]:
        """Get all recorded timings"""
        return self._timings.copy()


class PhaseLogger:
    """
    Logger with phase tracking and visual formatting

    Usage:
        phase_logger = PhaseLogger(request_id="abc123", extra_verbose=True)

        with phase_logger.phase(Phase.MODEL_CALL):
            phase_logger.info("Calling Gemini...")
            phase_logger.log_prompt("gemini-2.5-flash", system_instruction, user_prompt)
            phase_logger.log_response("gemini-2.5-flash", response_text)
    """

    def __init__(
        self,
        request_id: str,
        verbose: bool = False,
        extra_verbose: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        self.request_id = request_id
        self.verbose = verbose or extra_verbose
        self.extra_verbose = extra_verbose
        self.logger = logger or logging.getLogger(__name__)
        self.timing_tracker = TimingTracker()
        self._current_phase: Optional[str] = None
        self._phase_stack = []

    @property
    def current_phase(self) -> Optional[str]:
        return self._current_phase

    @contextmanager
    def phase(self, phase_name: str, sub_label: Optional[str] = None):
        """
        Context manager for phase tracking with automatic timing

        Example:
            with phase_logger.phase(Phase.MODEL_CALL, sub_label="British / Email"):
                ...
        """
        self._enter_phase(phase_name, sub_label)
        try:
            yield self
        finally:
            self._exit_phase(phase_name)

    def _enter_phase(self, phase_name: str, sub_label: Optional[str] = None):
        """Enter a new phase"""
        self._phase_stack.append(self._current_phase)
        self._current_phase = phase_name
        self.timing_tracker.start(f"phase_{phase_name}_{len(self._phase_stack)}")

        color = PHASE_COLORS.get(phase_name, Fore.WHITE)
        icon = PHASE_ICONS.get(phase_name, "[???]")
        timestamp = datetime.now().strftime("%H:%M:%S")
        sub_str = f" - {sub_label}" if sub_label else ""
        self.logger.info(
            f"{color}{icon} {phase_name}{sub_str} [{self.request_id}] [{timestamp}]{Style.RESET_ALL}"
        )

    def _exit_phase(self, phase_name: str):
        """Exit current phase"""
        elapsed = self.timing_tracker.end(f"phase_{phase_name}_{len(self._phase_stack)}")

        color = PHASE_COLORS.get(phase_name, Fore.WHITE)
        icon = PHASE_ICONS.get(phase_name, "[???]")
        elapsed_str = f"{elapsed:.2f}s" if elapsed > 0 else "N/A"
        self.logger.info(
            f"{color}{icon} {phase_name} COMPLETED (Elapsed: {elapsed_str}){Style.RESET_ALL}"
        )

        self._current_phase = self._phase_stack.pop() if self._phase_stack else None

    def info(self, message: str):
        """Log info message with current phase context"""
        if self._current_phase:
            color = PHASE_COLORS.get(self._current_phase, Fore.WHITE)
            icon = PHASE_ICONS.get(self._current_phase, "[???]")
            self.logger.info(f"{color}{icon}{Style.RESET_ALL} {message}")
        else:
            self.logger.info(message)

    def debug(self, message: str):
        """Log debug message (only if verbose)"""
        if self.verbose:
            self.logger.debug(f"{Fore.WHITE}{Style.DIM}{message}{Style.RESET_ALL}")

    def warning(self, message: str):
        """Log warning message"""
        self.logger.warning(f"{Fore.YELLOW}[WARN] {message}{Style.RESET_ALL}")

    def error(self, message: str):
        """Log error message"""
        self.logger.error(f"{Fore.RED}{Style.BRIGHT}[ERROR] {message}{Style.RESET_ALL}")

    def log_prompt(
        self,
        model: str,
        system_prompt: Optional[str],
        user_prompt: str,
        **kwargs
    ):
        """
        Log full prompt (only if extra_verbose)

        Args:
            model: Model name
            system_prompt: System instruction
            user_prompt: User prompt
            **kwargs: Additional parameters (temperature, etc.)
        """
        if not self.extra_verbose:
            return

        color = PHASE_COLORS.get(self._current_phase, Fore.WHITE)
        separator = "~" * 60

        self.logger.info(f"{color}{separator}{Style.RESET_ALL}")
        self.logger.info(f"{color}[EXTRA_VERBOSE] PROMPT TO {model}{Style.RESET_ALL}")
        self.logger.info(f"{color}{separator}{Style.RESET_ALL}")

        if system_prompt:
            self.logger.info(f"{Fore.CYAN}[SYSTEM PROMPT]{Style.RESET_ALL}")
            self.logger.info(system_prompt)
            self.logger.info("")

        self.logger.info(f"{Fore.GREEN}[USER PROMPT]{Style.RESET_ALL}")
        self.logger.info(user_prompt)

        if kwargs:
            self.logger.info("")
            self.logger.info(f"{Fore.YELLOW}[PARAMETERS]{Style.RESET_ALL}")
            for key, value in kwargs.items():
                self.logger.info(f"  {key}: {value}")

        self.logger.info(f"{color}{separator}{Style.RESET_ALL}")

    def log_response(
        self,
        model: str,
        response: str,
        metadata: Optional[Dict[str, Any]] = None
    ):
        """
        Log full response (only if extra_verbose)

        Args:
            model: Model name
            response: Raw response text
            metadata: Optional metadata (usage, timing, etc.)
        """
        if not self.extra_verbose:
            return

        color = PHASE_COLORS.get(self._current_phase, Fore.WHITE)
        separator = "~" * 60

        self.logger.info(f"{color}{separator}{Style.RESET_ALL}")
        self.logger.info(f"{color}[EXTRA_VERBOSE] RESPONSE FROM {model}{Style.RESET_ALL}")
        self.logger.info(f"{color}{separator}{Style.RESET_ALL}")

        if metadata:
            self.logger.info(f"{Fore.YELLOW}[METADATA]{Style.RESET_ALL}")
            for key, value in metadata.items():
                self.logger.info(f"  {key}: {value}")
            self.logger.info("")

        self.logger.info(f"{Fore.GREEN}[RESPONSE]{Style.RESET_ALL}")
        self.logger.info(response)
        self.logger.info(f"{color}{separator}{Style.RESET_ALL}")

    def log_timing_summary(self):
        """Log timing summary for all phases (only if verbose)"""
        if not self.verbose:
            return

        timings = self.timing_tracker.get_all()
        if not timings:
            return

        total_time = 0.0
        for key, elapsed in sorted(timings.items()):
            phase_name = key.replace("phase_", "").rsplit("_", 1)[0]
            color = PHASE_COLORS.get(phase_name, Fore.WHITE)
            self.logger.info(f"{color}{phase_name:30s} {elapsed:8.2f}s{Style.RESET_ALL}")
            total_time += elapsed

        self.logger.info(f"{Fore.WHITE}{Style.BRIGHT}TOTAL TIME: {total_time:.2f}s{Style.RESET_ALL}")


# Convenience functions
def create_phase_logger(
    request_id: str,
    verbose: bool = False,
    extra_verbose: bool = False
) -> PhaseLogger:
    """Create a new PhaseLogger instance"""
    return PhaseLogger(
        request_id=request_id,
        verbose=verbose,
        extra_verbose=extra_verbose
    )
