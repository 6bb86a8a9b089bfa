"""Studio catalog backend: REST catalog plus Cloudinary/Supabase sync engine."""
