"""Resource adapters.

Each function performs one operation against the site and returns an
:class:`~bp_cli.core.result.Outcome`; none of them print or exit.
"""
