"""
Built-in commands package.

Commands are loaded from individual subdirectories, each containing an __init__.py
that registers the command using @command_registry.register().

A command copied to ~/.fabric_admin/commands/ under the same name overrides the
package version.
"""
