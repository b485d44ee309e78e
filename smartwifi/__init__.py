"""
SmartWiFi Portal - captive-portal Wi-Fi voucher backend
"""
__version__ = "1.0.0"
