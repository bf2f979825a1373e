import time


PHASE_LABELS = {
    "awaiting_input": "INPUT",
    "fetching": "FETCHING",
    "displaying": "VIEW",
    "failed": "ERROR",
}


def render_status(context, width):
    """
    context keys: status_msg, status_until, phase, identifier, total, months
    """
    text = ""
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        mode = PHASE_LABELS.get(context.get("phase", ""), "INPUT")
        parts = [mode]
        identifier = context.get("identifier") or ""
        if identifier:
            parts.append(identifier)
        if mode == "VIEW":
            parts.append(f"{context.get('total', 0)} contributions")
        parts.append(f"{context.get('months', 0)} months")
        parts.append("Enter fetch | Esc quit")
        text = " " + " | ".join(parts)

    return text.ljust(width)[:width]
