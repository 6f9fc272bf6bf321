from polychart.config_model.model import load_config
cfg = load_config()  # $POLYCHART_CFG, else config/config.toml, else built-in defaults
print("Source:", cfg.source or "<built-in defaults>")
print("Update delay (ms):", cfg.scheduler.update_delay_ms)
print("Default height:", cfg.defaults.height, "/ area:", cfg.defaults.area_height)
print("Axis timezone:", cfg.formatting.timezone)
print("Theme:", cfg.theme.name)
