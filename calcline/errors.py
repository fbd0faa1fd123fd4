class CalcError(Exception):
    """Base for every per-line failure: the REPL reports it and moves on."""
