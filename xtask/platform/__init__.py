"""
xtask Platform Detection & Dependency Setup
OS/distribution detection and native library installation
"""

from xtask.platform.detector import (
    OSType,
    DistroFamily,
    PlatformProfile,
    classify_distro,
    detect_os,
    detect_profile,
    read_os_release,
)
from xtask.platform.plans import (
    PackagePlan,
    PACKAGE_PLANS,
    get_plan,
    manual_instructions,
)

__all__ = [
    'OSType',
    'DistroFamily',
    'PlatformProfile',
    'classify_distro',
    'detect_os',
    'detect_profile',
    'read_os_release',
    'PackagePlan',
    'PACKAGE_PLANS',
    'get_plan',
    'manual_instructions',
]
