"""Document store access: configuration, backends and the Database facade."""
