"""GetImg image generation client."""
