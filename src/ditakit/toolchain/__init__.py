"""Toolchain installation, execution context and invocation."""
