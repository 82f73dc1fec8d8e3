"""EcoGrow backend: tree scans, EcoCoin rewards and the redemption marketplace."""
