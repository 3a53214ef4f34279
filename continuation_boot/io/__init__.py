"""Lecture de grub.cfg et écriture du service systemd."""
