'''
3D unsteady panel method
date: 2 Oct 2017

Influence kernels of planar, constant strength source and doublet panels.
All functions are vectorised over the target points X, of shape (N,3).

Sign conventions:
- source of unit strength: phi = -1/(4 pi) int 1/r dS (outflow when positive)
- doublet of unit strength: phi = -Omega/(4 pi), with Omega the solid angle
  subtended by the panel, positive on the side the normal points to. This is
  equivalent to a vortex ring of unit circulation, anticlockwise about the
  normal (Ref.[1], sec. 10.4).

Ref.[1]: Katz and Plotkin, Low speed aerodynamics
Ref.[2]: Van Oosterom and Strackee, IEEE Trans. Biomed. Eng., 1983
'''

import numpy as np


# points closer than this (relative to the panel size) to a panel collocation
# point are considered to lie on the panel
TOL_NEAR=1e-8
# segments closer than this (relative to their length) induce no velocity
TOL_CORE=1e-8
# log arguments below this are treated as lying on the edge
TOL_LOG=1e-14

fact4pi=1./(4.*np.pi)


def _as_points(x):
	'''Returns an (N,3) array and a flag telling whether x was a single point'''

	X=np.asarray(x,dtype=float)
	if X.ndim==1:
		return X.reshape((1,3)), True
	return X, False


def solid_angle(X,verts,normal,centroid,size):
	'''
	Signed solid angle subtended by the planar polygon verts at the points X.
	The polygon is split in triangles (fan from verts[0]) and the solid angle
	of each is computed as per Ref.[2].

	Points just above/below the panel collocation point are assigned +/- 2 pi
	depending on the side. A point exactly on the collocation point gets the
	principal value, 0.
	'''

	Omega=np.zeros((X.shape[0],))
	R0=verts[0]-X
	r0=np.linalg.norm(R0,axis=1)
	for kk in range(1,len(verts)-1):
		R1=verts[kk]-X
		R2=verts[kk+1]-X
		r1=np.linalg.norm(R1,axis=1)
		r2=np.linalg.norm(R2,axis=1)
		num=np.einsum('ij,ij->i',R0,np.cross(R1,R2))
		den=r0*r1*r2+np.einsum('ij,ij->i',R0,R1)*r2\
					+np.einsum('ij,ij->i',R0,R2)*r1\
					+np.einsum('ij,ij->i',R1,R2)*r0
		# Ref.[2] gives the angle positive on the side opposite to the normal
		Omega-=2.*np.arctan2(num,den)

	# on-panel points
	D=X-centroid
	near=np.linalg.norm(D,axis=1)<TOL_NEAR*size
	if np.any(near):
		zz=np.dot(D[near],normal)
		Omega[near]=np.sign(zz)*2.*np.pi

	return Omega


def _edge_terms(X,verts,normal):
	'''
	For each polygon edge, returns:
		- outward in-plane unit normals Nu (Nedges,3)
		- log terms L (N,Nedges) = ln((ra+rb+d)/(ra+rb-d))
		- signed distances of X from edges Sd (N,Nedges) (positive inside)
	'''

	Ne=len(verts)
	Nu=np.zeros((Ne,3))
	L=np.zeros((X.shape[0],Ne))
	Sd=np.zeros((X.shape[0],Ne))

	for kk in range(Ne):
		va,vb=verts[kk],verts[(kk+1)%Ne]
		dv=vb-va
		dd=np.linalg.norm(dv)
		if dd<TOL_LOG:
			continue
		Nu[kk,:]=np.cross(dv,normal)/dd
		ra=np.linalg.norm(X-va,axis=1)
		rb=np.linalg.norm(X-vb,axis=1)
		den=ra+rb-dd
		ok=den>TOL_LOG*dd
		L[ok,kk]=np.log((ra[ok]+rb[ok]+dd)/den[ok])
		Sd[:,kk]=np.dot(va-X,Nu[kk,:])

	return Nu, L, Sd


def source_potential(X,verts,normal,centroid,Omega):
	'''
	Potential induced at X by a unit strength source panel. Uses the identity
		int 1/r dS = sum_k s_k L_k - z Omega
	where s_k is the distance of X from the k-th edge and z the height of X
	over the panel plane.
	'''

	Nu,L,Sd=_edge_terms(X,verts,normal)
	zz=np.dot(X-centroid,normal)
	Integral=np.sum(Sd*L,axis=1)-zz*Omega

	return -fact4pi*Integral


def source_velocity(X,verts,normal,Omega):
	'''
	Velocity induced at X by a unit strength source panel. The tangential
	component follows from the edge log terms, the normal one is Omega/(4 pi).
	'''

	Nu,L,Sd=_edge_terms(X,verts,normal)
	V=np.dot(L,Nu)+np.outer(Omega,normal)

	return fact4pi*V


def biot_savart_segment(X,za,zb,Gamma=1.0):
	'''
	Velocity induced at X by a straight vortex segment from za to zb.
	Ref.[1], eq.(10.115). Points on the segment line induce no velocity.
	'''

	R1=X-za
	R2=X-zb
	R0=zb-za
	Cross=np.cross(R1,R2)
	cross2=np.einsum('ij,ij->i',Cross,Cross)
	r0sq=np.dot(R0,R0)

	V=np.zeros(X.shape)
	ok=cross2>(TOL_CORE**2)*r0sq**2
	if not np.any(ok):
		return V

	r1=np.linalg.norm(R1[ok],axis=1)
	r2=np.linalg.norm(R2[ok],axis=1)
	proj=np.dot(R1[ok],R0)/r1-np.dot(R2[ok],R0)/r2
	V[ok]=fact4pi*Gamma*Cross[ok]*(proj/cross2[ok])[:,None]

	return V


def vortex_ring_velocity(X,verts,Gamma=1.0):
	'''
	Velocity induced at X by a vortex ring through verts (circulation positive
	anticlockwise about the normal defined by the vertices order).
	'''

	V=np.zeros(X.shape)
	Nv=len(verts)
	for kk in range(Nv):
		V+=biot_savart_segment(X,verts[kk],verts[(kk+1)%Nv],Gamma)

	return V
