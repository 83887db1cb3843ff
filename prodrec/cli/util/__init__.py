from prodrec.cli.util.runner import exit_code_for, load_uploads, run_handler

__all__ = ["exit_code_for", "load_uploads", "run_handler"]
