"""
GNOME binding configuration

Namespace prefixes and name overrides for the common GNOME platform
libraries.
"""

from gir_bindgen import Config, Generator


# ==============================================================================
# Namespace Prefixes
# ==============================================================================

PREFIXES = {
    'GLib': 'g',
    'GObject': 'g',
    'GModule': 'g',
    'Gio': 'g',
    'Gtk': 'gtk',
    'Gdk': 'gdk',
    'GdkPixbuf': 'gdk',
    'Pango': 'pango',
    'PangoCairo': 'pango',
    'Atk': 'atk',
    'cairo': 'cairo',
    'Soup': 'soup',
}


# ==============================================================================
# Name Overrides
# ==============================================================================

# Local name -> identifier, for symbols whose derived name collides
NAMES: dict[str, str] = {}


# ==============================================================================
# Configuration
# ==============================================================================

def configure(gen: Generator):
    """Configure generator with GNOME-specific settings"""
    gen.configure(Config(prefixes=PREFIXES, names=NAMES))

    # Variadic functions cannot be declared through ctypes argtypes
    gen.ignore(
        'GLib.printf',
        'GLib.strdup_printf',
        'GObject.object_new',
        'GObject.signal_emit',
    )
