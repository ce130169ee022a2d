"""CourseHub backend: course catalog, lessons, orders and admin summary."""
