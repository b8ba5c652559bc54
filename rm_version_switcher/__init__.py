"""
rm-version-switcher package

This package inspects and switches the next-boot OS partition on A/B
partitioned reMarkable devices.
"""
