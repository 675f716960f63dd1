"""Binary resources bundled with boxupdater (flash_nuke.uf2)."""
