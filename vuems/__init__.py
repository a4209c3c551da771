"""vuems: build-time composition of micro-modules into a host application.

Discovers modules (`vuems.registry`), validates their relations and merges
their aliases, plugins and global css into the host build configuration
(`vuems.prepare`) through an explicit `vuems.build.BuildContext`.
"""

__version__ = "1.0.1"
