"""STRATA test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Several layers wired together through `bootstrap()`.
- e2e/          : The `strata` command line, driven through Click's CliRunner.

General guidance
- Keep unit tests fast and deterministic; use the in-memory config service
  instead of mocks at the config-client boundary.
- Pass explicit `environ` mappings so real environment variables never leak in.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
