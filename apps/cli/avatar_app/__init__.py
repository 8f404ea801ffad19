"""avatargen command line app."""
