__version__ = "0.1.0"
__author__ = "stlio developers"
__author_email__ = "stlio@users.noreply.github.com"
__website__ = "https://github.com/stlio/stlio"
__license__ = "License :: OSI Approved :: MIT License"
__status__ = "Development Status :: 4 - Beta"
