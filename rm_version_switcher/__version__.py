#                                      _ _       _
#  _ __ _ __ ___        _____      _(_) |_ ___| |__   ___ _ __
# | '__| '_ ` _ \ _____/ __\ \ /\ / / | __/ __| '_ \ / _ \ '__|
# | |  | | | | | |_____\__ \\ V  V /| | || (__| | | |  __/ |
# |_|  |_| |_| |_|     |___/ \_/\_/ |_|\__\___|_| |_|\___|_|
#

__title__ = "rm_version_switcher"
__description__ = "inspect and switch the next-boot partition on A/B reMarkable devices"
__version__ = "1.2.0"
__status__ = "beta"
__license__ = "BSD-3-Clause"
__license_url__ = "https://opensource.org/licenses/BSD-3-Clause"
