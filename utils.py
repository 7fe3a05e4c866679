import re
import time


def strip_code_fences(text: str) -> str:
    """
    Remove a single leading/trailing fenced block like:
      ```json ... ```
      ``` ... ```
    without destroying inline backticks inside the content.
    """
    if not text:
        return ""
    t = text.strip()
    m = re.match(r"^```(?:json)?\s*\n?", t, flags=re.IGNORECASE)
    if m:
        t = t[m.end():]
        t = re.sub(r"\n?```[\s\t]*$", "", t)
    return t.strip()


def elapsed_ms(start: float) -> str:
    """Wall-clock time since ``start`` (a ``time.perf_counter()`` value), e.g. '1234ms'."""
    return f"{int((time.perf_counter() - start) * 1000)}ms"
