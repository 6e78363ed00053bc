"""hubfirmware core: firmware package reader and hub name encoder."""
