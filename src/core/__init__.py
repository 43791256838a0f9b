"""Pattern matching, chat log splitting, and the batch loop for chatsieve."""
