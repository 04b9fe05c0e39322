"""
Test package for odoo-do.

This package contains:
- test_client.py: Session lifecycle, execute_kw and ORM methods
- test_domain.py: Domain construction and validation
- test_args.py: Argument lists and credential prefixes
- test_decoders.py: Response decoding
- test_transport.py: XML-RPC over HTTP
- test_errors.py: Error codes and messages
- test_config.py: Global configuration
- test_cli.py: Command line interface
- mock_server.py: Fake Odoo server for testing
- conftest.py: Pytest configuration and fixtures
"""
