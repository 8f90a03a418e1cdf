"""
SQL Managed Instance broker.

Provisions Azure SQL managed instances exactly once: the instance name is
looked up first, a desired state is built from the user's input only when no
instance exists, and that state is then submitted to the control plane.

Key Components:
    - domain: managed instance model, error taxonomy and ports
    - application: existence check, desired-state builder, orchestrator
    - infrastructure: logging, tag and identity collaborators
    - providers: Azure SQL management gateway
    - interface / cli: command line surface

Usage:

    >>> sqlmi managed-instance create -g rg1 -n sqlmi1 -l westeurope ...
"""

__version__ = "0.1.0"
