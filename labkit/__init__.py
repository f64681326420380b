"""Simulated heap, allocation traces, timing helpers, robust I/O, sockets and a CGI adder."""

__version__ = "0.1.0"