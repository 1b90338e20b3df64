"""Value model and environments for klisp."""
