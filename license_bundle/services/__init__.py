"""
Audit services: license core, dependency resolution, reports and the workflow
that ties them together.
"""
