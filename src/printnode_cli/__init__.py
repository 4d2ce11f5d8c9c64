"""Client and command line tool for PrintNode Integrator accounts."""

__version__ = "0.1.0"
