"""
Main entry point for the Usage Cost Monitor dashboard when run as a module.
Usage: python -m usage_monitor.visualization.dashboard
"""

import sys
import traceback

from usage_monitor.visualization.dashboard import main


def main_entry():
    """Main entry point for the dashboard."""
    try:
        main()
    except KeyboardInterrupt:
        print("\n🛑 Dashboard stopped by user")
        sys.exit(0)
    except Exception as e:
        print(f"❌ Failed to start dashboard: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main_entry()
