#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# translation_utils.py - Utilities for translation support
#
import gettext
import os

# Determine locale directory (works in AppImage and system install)
locale_dir = '/usr/share/locale'  # Default for system install

# Allow running from a relocated prefix, e.g. a virtualenv or AppImage
if 'GFILEKIT_LOCALEDIR' in os.environ:
    locale_dir = os.environ['GFILEKIT_LOCALEDIR']
elif 'APPIMAGE' in os.environ or 'APPDIR' in os.environ:
    # translation_utils.py is in: usr/share/gfilekit/utils/translation_utils.py
    # We need to get to: usr/share/locale
    script_dir = os.path.dirname(os.path.abspath(__file__))
    app_dir = os.path.dirname(script_dir)
    share_dir = os.path.dirname(app_dir)
    appimage_locale = os.path.join(share_dir, 'locale')

    if os.path.isdir(appimage_locale):
        locale_dir = appimage_locale

# Configure the translation text domain for gfilekit
gettext.bindtextdomain("gfilekit", locale_dir)
gettext.textdomain("gfilekit")

# Export _ directly as the translation function
_ = gettext.gettext


def N_(message: str) -> str:
    """Mark a string for extraction without translating it yet."""
    return message
