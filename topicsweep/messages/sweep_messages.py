# topicsweep/messages/sweep_messages.py

ARTIFACT_REUSED = "Reusing cached {name} artifact: {key}"
ARTIFACT_STORED = "Stored {name} artifact: {key}"
SWEEP_STARTED = "Topic sweep started for K={ks} on {n_train} train / {n_test} test documents"
SWEEP_COMPLETED = "Topic sweep completed. Best K={best_k} (perplexity={perplexity:.4f})"
SWEEP_PARTIAL = "Topic sweep finished with {n_failed} failed K values: {failed}"
TOKENS_LOADED = "Loaded {n_tokens} tokens for {n_documents} documents from {path}"
OUTPUTS_WRITTEN = "Wrote TF-IDF table to {tfidf} and perplexity curve to {curve}"
TOPICS_SKIPPED = "❌ Could not refit the selected model for the topic summary: {error}"
