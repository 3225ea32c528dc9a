"""Application package initializer.

Ensures the local ``template_catalog`` package takes precedence over similarly
named modules that might be installed in the environment.
"""

# The package intentionally re-exports nothing; the presence of this file is
# sufficient for Python to treat ``template_catalog`` as a regular package.
